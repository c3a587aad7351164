from pathlib import Path
from unittest import mock

import pytest

from erlman.config import ErlmanConfig, build_context, resolve_manpath
from erlman.errors import ManPathNotFoundError
from erlman.exports import ErlExportProvider, StaticExportProvider


def test_defaults_from_empty_env():
    config = ErlmanConfig.from_env({})
    assert config == ErlmanConfig()
    assert config.legacy_signature is True
    assert config.erl == "erl"
    assert config.erl_timeout == 10.0


def test_from_env_reads_all_settings():
    config = ErlmanConfig.from_env({
        "ERLMAN_MANPATH": "/opt/otp/man",
        "ERLMAN_ERL": "/opt/otp/bin/erl",
        "ERLMAN_EXPORTS_FILE": "/tmp/exports.json",
        "ERLMAN_LEGACY_SIGNATURE": "FALSE",
        "ERLMAN_ERL_TIMEOUT": "2.5",
        "ERLMAN_LOG_LEVEL": "debug",
    })
    assert config.manpath == Path("/opt/otp/man")
    assert config.erl == "/opt/otp/bin/erl"
    assert config.exports_file == Path("/tmp/exports.json")
    assert config.legacy_signature is False
    assert config.erl_timeout == 2.5
    assert config.log_level == "DEBUG"


def test_bad_timeout():
    with pytest.raises(ValueError):
        ErlmanConfig.from_env({"ERLMAN_ERL_TIMEOUT": "soon"})


def test_with_overrides_skips_none():
    config = ErlmanConfig(manpath=Path("/a"))
    assert config.with_overrides(manpath=None, erl="erl27") == ErlmanConfig(manpath=Path("/a"), erl="erl27")


def test_resolve_manpath_prefers_config(man_root):
    assert resolve_manpath(ErlmanConfig(manpath=man_root)) == man_root


def test_resolve_manpath_without_erl():
    with mock.patch("erlman.config.find_erl", return_value=None):
        with pytest.raises(ManPathNotFoundError):
            resolve_manpath(ErlmanConfig())


def test_resolve_manpath_discovers(man_root):
    erl = man_root.parent / "bin" / "erl"
    erl.parent.mkdir()
    erl.write_text("")
    with mock.patch("erlman.config.find_erl", return_value=erl):
        assert resolve_manpath(ErlmanConfig()) == man_root


def test_build_context_with_exports_file(man_root, exports_file):
    ctx = build_context(ErlmanConfig(manpath=man_root, exports_file=exports_file, legacy_signature=False))
    assert isinstance(ctx.exports, StaticExportProvider)
    assert ctx.pages.root == man_root
    assert ctx.legacy_signature is False


def test_build_context_uses_erl_provider(man_root):
    ctx = build_context(ErlmanConfig(manpath=man_root, erl="erl27", erl_timeout=4))
    assert isinstance(ctx.exports, ErlExportProvider)
    assert ctx.exports.erl == "erl27"
    assert ctx.exports.timeout == 4
