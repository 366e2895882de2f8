from __future__ import annotations

import pytest

from models.modules import ModuleState


def test_unknown_fields_pass_through_untouched() -> None:
    state = ModuleState.model_validate(
        {"module_key": "crm", "module_name": "CRM", "sector": "retail", "icon": None}
    )

    assert state.model_extra == {"sector": "retail", "icon": None}
    assert state.model_dump()["sector"] == "retail"


def test_wrong_typed_fields_are_coerced() -> None:
    state = ModuleState.model_validate(
        {
            "module_key": None,
            "module_name": 7,
            "features": {"key": "x"},
            "dependencies": ["a", None, 3, "b"],
            "version": 1,
        }
    )

    assert state.module_key == ""
    assert state.module_name == "7"
    assert state.features == []
    assert state.dependencies == ["a", "3", "b"]
    assert state.version == "1"


def test_feature_keys_skip_features_without_key() -> None:
    state = ModuleState(
        features=[{"key": "a"}, {"name": "b"}, {"key": ""}, "c", {"key": "d"}]
    )

    assert state.feature_keys() == ["a", "d"]


def test_coerce_none_is_empty_state() -> None:
    assert ModuleState.coerce(None) == ModuleState()


def test_coerce_rejects_non_mapping() -> None:
    with pytest.raises(TypeError):
        ModuleState.coerce("crm")  # type: ignore[arg-type]
