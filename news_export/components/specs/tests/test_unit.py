"""
Specs component unit tests.
"""

from __future__ import annotations

import logging

import pytest

from news_export.components.specs import Spec, SpecRegistry
from news_export.core.errors import InvalidSpecError, UnknownSpecError


@pytest.fixture
def registry() -> SpecRegistry:
    registry = SpecRegistry("body")
    registry.register_spec("json", "JSON", {"role": "body", "text": "#text#"})
    registry.register_spec("body-layout", "Layout", {"margin": {"top": 12}})
    return registry


class TestRegistration:
    def test_get_spec(self, registry: SpecRegistry) -> None:
        spec = registry.get_spec("json")

        assert spec == Spec(name="json", label="JSON", template={"role": "body", "text": "#text#"})
        assert spec.tokens() == {"text"}

    def test_unknown_spec(self, registry: SpecRegistry) -> None:
        assert registry.get_spec("missing") is None

        with pytest.raises(UnknownSpecError) as exc:
            registry.require_spec("missing")
        assert exc.value.spec_name == "missing"
        assert exc.value.component_type == "body"

    def test_last_registration_wins(self, registry: SpecRegistry) -> None:
        registry.register_spec("json", "JSON v2", {"role": "body"})

        assert registry.require_spec("json").template == {"role": "body"}
        assert registry.require_spec("json").label == "JSON v2"

    def test_template_copied_on_registration(self) -> None:
        template = {"margin": {"top": 1}}
        registry = SpecRegistry("photo")
        registry.register_spec("layout", "Layout", template)

        template["margin"]["top"] = 99

        assert registry.require_spec("layout").template == {"margin": {"top": 1}}

    def test_rejects_code(self) -> None:
        with pytest.raises(InvalidSpecError):
            SpecRegistry("body").register_spec("json", "JSON", {"role": lambda: "body"})

    def test_get_all_specs_in_order(self, registry: SpecRegistry) -> None:
        specs = registry.get_all_specs()

        assert list(specs) == ["json", "body-layout"]
        assert specs["body-layout"] == {"label": "Layout", "template": {"margin": {"top": 12}}}

    def test_substitute(self, registry: SpecRegistry) -> None:
        assert registry.require_spec("json").substitute({"#text#": "Hi"}) == {
            "role": "body",
            "text": "Hi",
        }


class TestOverrides:
    def test_accepted_override(self, registry: SpecRegistry) -> None:
        applied = registry.apply_overrides(
            {"json": {"role": "body", "text": "#text#", "identifier": "lead"}}
        )

        assert applied == ["json"]
        assert registry.require_spec("json").template["identifier"] == "lead"
        assert registry.require_spec("json").label == "JSON"

    def test_override_with_unknown_token_rejected(
        self, registry: SpecRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            applied = registry.apply_overrides({"json": {"role": "#secret#"}})

        assert applied == []
        assert registry.require_spec("json").template == {"role": "body", "text": "#text#"}
        assert "#secret#" in caplog.text

    def test_override_for_unknown_spec_rejected(self, registry: SpecRegistry) -> None:
        assert registry.apply_overrides({"nope": {}}) == []
        assert registry.get_spec("nope") is None

    def test_validate_override_reasons(self, registry: SpecRegistry) -> None:
        assert registry.validate_override("json", {"text": "#text#"}) is None
        assert "unknown spec" in registry.validate_override("nope", {})
        assert "unsupported value" in registry.validate_override("json", {"a": (1,)})
