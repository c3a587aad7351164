import json
from pathlib import Path

import pytest

from erlman.config import DocContext
from erlman.exports import StaticExportProvider
from erlman.manpath import ManPageSource


CRYPTO_PAGE = r""".TH crypto 3 "crypto 3.6" "Ericsson AB" "Erlang Module Definition"
.SH NAME
crypto \- Crypto Functions
.SH DESCRIPTION
.LP
This module provides a set of cryptographic functions\&.
.RS 2
.TP 2
*
Hash functions
.RE
.SH EXPORTS
.LP
.B
hash(Type, Data) -> Digest
.br
.RS
.LP
Types:
.RE
.RS 3
Type = md5 | sha
.br
Data = iodata()
.br
.RE
.RS
.LP
Computes a message digest of type \fIType\fR from \fIData\fR\&.
.nf
crypto:hash(sha, <<"abc">>)
.fi
.RE
.LP
.B
hash_init(Type) -> Context
.br
.RS
.LP
Initializes the context for streaming hash operations\&.
.RE
.LP
.B
hash_final(Context) -> Digest
.br
.RS
.LP
Finalizes the streaming hash operation\&.
.RE
.LP
.B
rand_bytes(N) -> binary()
.br
.RS
.LP
Deprecated; documented here but no longer exported\&.
.RE
"""

CRYPTO_EXPORTS = {
    "crypto": [["hash", 2], ["hash_init", 1], ["hash_final", 1], ["start", 0]],
}


@pytest.fixture
def crypto_page() -> str:
    return CRYPTO_PAGE


@pytest.fixture
def man_root(tmp_path: Path) -> Path:
    root = tmp_path / "lib" / "erlang" / "man"
    (root / "man3").mkdir(parents=True)
    (root / "man1").mkdir()
    (root / "man3" / "crypto.3").write_text(CRYPTO_PAGE, encoding="utf-8")
    (root / "man3" / "ets.3").write_text(".TH ets 3\n.SH EXPORTS\n", encoding="utf-8")
    (root / "man1" / "erl.1").write_text(".TH erl 1\n", encoding="utf-8")
    return root


@pytest.fixture
def exports_file(tmp_path: Path) -> Path:
    path = tmp_path / "exports.json"
    path.write_text(json.dumps(CRYPTO_EXPORTS), encoding="utf-8")
    return path


@pytest.fixture
def ctx(man_root: Path) -> DocContext:
    return DocContext(
        pages=ManPageSource(man_root),
        exports=StaticExportProvider(CRYPTO_EXPORTS),
    )
