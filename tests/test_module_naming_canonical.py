from __future__ import annotations

from pathlib import Path

import pytest

from utils import is_package_path, path_to_module


def test_path_to_module_canonical_src_package_rules() -> None:
    assert path_to_module("src/shop/__init__.py") == "shop"
    assert path_to_module("src/shop/domain/entity.py") == "shop.domain.entity"


def test_path_to_module_fallback_rules_are_deterministic() -> None:
    assert path_to_module("shop/presentation/api.py") == "shop.presentation.api"
    assert path_to_module("shop/__init__.py") == "shop"
    assert path_to_module(Path("nested/feature/tool.py")) == "nested.feature.tool"


def test_path_to_module_rejects_empty_module_names() -> None:
    with pytest.raises(ValueError, match="non-empty"):
        path_to_module("__init__.py")

    with pytest.raises(ValueError, match="non-empty"):
        path_to_module("src/__init__.py")


def test_is_package_path() -> None:
    assert is_package_path("shop/domain/__init__.py") is True
    assert is_package_path("shop/domain/entity.py") is False
