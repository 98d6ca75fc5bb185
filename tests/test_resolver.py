"""Tests for the resolver module."""

import pytest

from schemagen.errors import CycleDetected, ReferenceNotFound
from schemagen.resolver import ref_name, resolve


_REGISTRY: dict = {
    "Pet": {"type": "object", "properties": {"name": {"type": "string"}}},
    "Animal": {"$ref": "#/components/schemas/Pet"},
    "Creature": {"$ref": "#/components/schemas/Animal"},
    "A": {"$ref": "#/components/schemas/B"},
    "B": {"$ref": "#/components/schemas/A"},
    "Self": {"$ref": "#/components/schemas/Self"},
    "Dangling": {"$ref": "#/components/schemas/Nowhere"},
}


class TestRefName:
    """Test reference token → component name."""

    def test_components_pointer(self):
        assert ref_name("#/components/schemas/Pet") == "Pet"

    def test_bare_name(self):
        assert ref_name("Pet") == "Pet"

    def test_other_pointer_uses_last_segment(self):
        assert ref_name("#/definitions/Pet") == "Pet"


class TestResolve:
    """Test $ref resolution against the component registry."""

    def test_direct(self):
        resolved = resolve("#/components/schemas/Pet", _REGISTRY)
        assert resolved.name == "Pet"
        assert resolved.schema is _REGISTRY["Pet"]
        assert resolved.path == ("Pet",)

    def test_chain_resolves_to_concrete_schema(self):
        resolved = resolve("#/components/schemas/Creature", _REGISTRY)
        assert resolved.schema is _REGISTRY["Pet"]
        assert resolved.name == "Pet"
        assert resolved.path == ("Creature", "Animal", "Pet")

    def test_missing(self):
        with pytest.raises(ReferenceNotFound) as exc:
            resolve("#/components/schemas/Missing", _REGISTRY)
        assert exc.value.ref == "#/components/schemas/Missing"

    def test_missing_at_end_of_chain(self):
        with pytest.raises(ReferenceNotFound):
            resolve("#/components/schemas/Dangling", _REGISTRY)

    def test_mutual_cycle(self):
        """A -> B -> A must fail, never recurse without bound."""
        with pytest.raises(CycleDetected) as exc:
            resolve("#/components/schemas/A", _REGISTRY)
        assert exc.value.path == ("A", "B", "A")

    def test_self_cycle(self):
        with pytest.raises(CycleDetected):
            resolve("#/components/schemas/Self", _REGISTRY)

    def test_name_already_being_expanded(self):
        """A name on the caller's expansion path counts as a cycle."""
        with pytest.raises(CycleDetected) as exc:
            resolve("#/components/schemas/Pet", _REGISTRY, visiting=("Owner", "Pet"))
        assert exc.value.path == ("Owner", "Pet", "Pet")

    def test_registry_untouched(self):
        before = dict(_REGISTRY)
        resolve("#/components/schemas/Creature", _REGISTRY)
        assert _REGISTRY == before
