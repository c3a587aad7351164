import unittest

from erlman.errors import (
    ErlmanError, SegmentMarkerMissingError, FunctionNotMatchedError,
    DocumentationFileMissingError, ManPathNotFoundError,
    ModuleNotLoadedError, DocsSchemaError
)


class TestErlmanErrors(unittest.TestCase):
    def test_erlman_error_base(self):
        err = ErlmanError("CODE", "message", "ctx")
        self.assertEqual(err.code, "CODE")
        self.assertEqual(err.message, "message")
        self.assertEqual(err.context, "ctx")
        self.assertIn("https://erlman.readthedocs.io/errors/CODE", err.doc_url)
        self.assertEqual(str(err), "[CODE] message Context: ctx")

    def test_error_without_context(self):
        err = ModuleNotLoadedError()
        self.assertIsNone(err.context)
        self.assertNotIn("Context", str(err))

    def test_concrete_errors(self):
        classes = [
            SegmentMarkerMissingError, FunctionNotMatchedError,
            DocumentationFileMissingError, ManPathNotFoundError,
            ModuleNotLoadedError, DocsSchemaError
        ]
        codes = set()
        for cls in classes:
            with self.subTest(cls=cls.__name__):
                err = cls("some context")
                self.assertIsInstance(err, ErlmanError)
                self.assertEqual(err.context, "some context")
                self.assertTrue(err.code.startswith("ERLMAN_E"))
                self.assertIn("some context", str(err))
                codes.add(err.code)
        self.assertEqual(len(codes), len(classes))


if __name__ == "__main__":
    unittest.main()
