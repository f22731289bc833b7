from __future__ import annotations

import cloudtargets


def test_version() -> None:
    assert isinstance(cloudtargets.__version__, str)


def test_all_exports_exist() -> None:
    for name in cloudtargets.__all__:
        assert hasattr(cloudtargets, name)
