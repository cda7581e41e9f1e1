from __future__ import annotations

import pytest

from rules.errors import DanglingReferenceError, UnknownLayerError
from rules.layers import LAYER_ORDER, Layer
from rules.validator import ModuleSpec, find_layer_violations


def test_empty_graph_has_no_violations() -> None:
    assert find_layer_violations({}) == []


def test_domain_referencing_infrastructure_reports_one_violation() -> None:
    modules = {
        "domain/entity/User": ModuleSpec(
            Layer.DOMAIN, {"infrastructure/persistence/UserRepositoryImpl"}
        ),
        "infrastructure/persistence/UserRepositoryImpl": ModuleSpec(
            Layer.INFRASTRUCTURE, {"domain/entity/User"}
        ),
    }

    violations = find_layer_violations(modules)

    assert [v.as_tuple() for v in violations] == [
        (
            "domain/entity/User",
            Layer.DOMAIN,
            "infrastructure/persistence/UserRepositoryImpl",
            Layer.INFRASTRUCTURE,
        )
    ]


def test_presentation_referencing_application_is_allowed() -> None:
    modules = {
        "presentation/controller/UserController": (
            Layer.PRESENTATION,
            ["application/service/CreateUserService"],
        ),
        "application/service/CreateUserService": (Layer.APPLICATION, []),
    }

    assert find_layer_violations(modules) == []


@pytest.mark.parametrize("layer", LAYER_ORDER)
def test_same_layer_reference_is_never_reported(layer: Layer) -> None:
    modules = {
        "a": ModuleSpec(layer, {"b"}),
        "b": ModuleSpec(layer, {"a"}),
    }

    assert find_layer_violations(modules) == []


def test_every_outward_edge_reported_and_every_inward_edge_allowed() -> None:
    modules = {
        layer.value: ModuleSpec(
            layer, {other.value for other in LAYER_ORDER if other is not layer}
        )
        for layer in LAYER_ORDER
    }

    violations = find_layer_violations(modules)

    reported = {(v.from_layer, v.to_layer) for v in violations}
    expected = {
        (inner, outer)
        for inner in LAYER_ORDER
        for outer in LAYER_ORDER
        if outer.rank > inner.rank
    }
    assert reported == expected
    assert len(violations) == 6


def test_violations_sorted_by_from_then_to_module() -> None:
    modules = {
        "z_domain": ModuleSpec(Layer.DOMAIN, {"b_ui", "a_ui"}),
        "a_domain": ModuleSpec(Layer.DOMAIN, {"b_ui"}),
        "a_ui": ModuleSpec(Layer.PRESENTATION),
        "b_ui": ModuleSpec(Layer.PRESENTATION),
    }

    violations = find_layer_violations(modules)

    assert [(v.from_module, v.to_module) for v in violations] == [
        ("a_domain", "b_ui"),
        ("z_domain", "a_ui"),
        ("z_domain", "b_ui"),
    ]


def test_repeated_runs_are_identical() -> None:
    modules = {
        "core": ModuleSpec(Layer.DOMAIN, ["api", "db", "api"]),
        "api": ModuleSpec(Layer.PRESENTATION, ["core"]),
        "db": ModuleSpec(Layer.INFRASTRUCTURE, ["core"]),
    }

    first = find_layer_violations(modules)
    second = find_layer_violations(modules)

    assert first == second
    assert [v.to_module for v in first] == ["api", "db"]


def test_dangling_reference_raises() -> None:
    modules = {"domain/entity/User": ModuleSpec(Layer.DOMAIN, {"domain/missing"})}

    with pytest.raises(DanglingReferenceError) as exc_info:
        find_layer_violations(modules)

    assert exc_info.value.module == "domain/entity/User"
    assert exc_info.value.reference == "domain/missing"


def test_external_reference_is_exempt() -> None:
    modules = {"domain/entity/User": ModuleSpec(Layer.DOMAIN, {"dataclasses"})}

    assert find_layer_violations(modules, external={"dataclasses"}) == []


def test_external_marking_does_not_exempt_modules_in_graph() -> None:
    modules = {
        "core": ModuleSpec(Layer.DOMAIN, {"web"}),
        "web": ModuleSpec(Layer.PRESENTATION),
    }

    violations = find_layer_violations(modules, external={"web"})

    assert [v.to_module for v in violations] == ["web"]


def test_layer_names_are_accepted_as_strings() -> None:
    modules = {
        "core": ("Domain", {"web"}),
        "web": ("presentation", ()),
    }

    violations = find_layer_violations(modules)

    assert [v.as_tuple() for v in violations] == [
        ("core", Layer.DOMAIN, "web", Layer.PRESENTATION)
    ]


def test_unknown_layer_raises_before_dangling_reference() -> None:
    modules = {
        "a": ModuleSpec(Layer.DOMAIN, {"nowhere"}),
        "b": ModuleSpec("persistence", ()),
    }

    with pytest.raises(UnknownLayerError) as exc_info:
        find_layer_violations(modules)

    assert exc_info.value.module == "b"
    assert exc_info.value.value == "persistence"


def test_inputs_are_not_mutated() -> None:
    references = {"web"}
    modules = {
        "core": ModuleSpec(Layer.DOMAIN, references),
        "web": ModuleSpec(Layer.PRESENTATION),
    }

    find_layer_violations(modules)

    assert references == {"web"}
    assert list(modules) == ["core", "web"]


def test_bare_string_references_are_rejected() -> None:
    modules = {
        "core": ("domain", "web"),
        "web": ModuleSpec(Layer.PRESENTATION),
    }

    with pytest.raises(TypeError, match="core"):
        find_layer_violations(modules)
