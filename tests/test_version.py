"""Tests for dotlog._version — version string helpers."""

import re

from dotlog import _version
from dotlog._version import (
    BASE_VERSION, PIP_VERSION, VERSION, get_base_version, get_pip_version,
    get_version,
)


class TestVersion:

    def test_base_version_format(self):
        assert re.fullmatch(r"\d+\.\d+\.\d+(-\w+)?", get_base_version())

    def test_full_version_starts_with_base(self):
        assert get_version().startswith(get_base_version())

    def test_constants_match_functions(self):
        assert VERSION == get_version()
        assert BASE_VERSION == get_base_version()
        assert PIP_VERSION == get_pip_version()

    def test_pip_version_is_pep440(self):
        assert re.fullmatch(r"\d+\.\d+\.\d+((a|b|rc)\d+)?(\.dev\d+)?", PIP_VERSION)

    def test_package_exports_version(self):
        import dotlog
        assert dotlog.__version__ == _version.__version__
        assert dotlog.__app_name__ == "dotlog"
