"""
errors.py — Erlman Error Taxonomy

Coded errors for the conversion pipeline and its host adapters. Each code
links to a short troubleshooting page.
"""

from typing import Optional

__all__ = [
    "ErlmanError",
    "SegmentMarkerMissingError",
    "FunctionNotMatchedError",
    "DocumentationFileMissingError",
    "ManPathNotFoundError",
    "ModuleNotLoadedError",
    "DocsSchemaError",
]

class ErlmanError(Exception):
    """Base class for all erlman errors."""
    def __init__(
        self,
        code: str,
        message: str,
        context: Optional[str] = None,
    ):
        self.code = code
        self.message = message
        self.context = context

        full_msg = f"[{code}] {message}"
        if context:
            full_msg += f" Context: {context}"

        super().__init__(full_msg)

    @property
    def doc_url(self) -> str:
        """Link to the human-readable documentation for this error."""
        return f"https://erlman.readthedocs.io/errors/{self.code}"

# Page Structure Errors (E0xx)
class SegmentMarkerMissingError(ErlmanError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("ERLMAN_E001", "The page has no '.SH EXPORTS' section marker.", context)

class FunctionNotMatchedError(ErlmanError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("ERLMAN_E002", "The block does not start with any exported function name.", context)

# Lookup Errors (E1xx)
class DocumentationFileMissingError(ErlmanError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("ERLMAN_E100", "No man page was found for the requested reference.", context)

class ManPathNotFoundError(ErlmanError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("ERLMAN_E101", "Could not locate the Erlang man directory.", context)

# Host Runtime Errors (E2xx)
class ModuleNotLoadedError(ErlmanError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("ERLMAN_E200", "The module export list could not be retrieved; the module is not loaded.", context)

# Output Errors (E3xx)
class DocsSchemaError(ErlmanError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("ERLMAN_E300", "The exported documentation does not match the docs schema.", context)
