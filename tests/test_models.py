"""Tests for the models module."""

from schemagen.models import DataStructure, EndpointExtracted, PropertyType, TemplateData, extend_unique


def _pet(name="Pet", **kwargs):
    return DataStructure(
        name=name,
        property_type=PropertyType.OBJECT,
        object_name="PetObject",
        required_properties=["id"],
        properties=[
            DataStructure(name="id", property_type=PropertyType.INTEGER, format="Int64", required=True),
            DataStructure(name="tag", property_type=PropertyType.STRING),
        ],
        **kwargs,
    )


class TestDataStructure:
    """Test the canonical model node."""

    def test_property_type_text(self):
        assert str(PropertyType.ARRAY) == "Array"
        assert PropertyType.STRING == "String"

    def test_kind_helpers(self):
        pet = _pet()
        assert pet.is_object and not pet.is_array and not pet.is_scalar
        assert pet.properties[0].is_scalar
        assert pet.item is None

    def test_item(self):
        arr = DataStructure(name="pets", property_type=PropertyType.ARRAY, properties=[_pet()])
        assert arr.item is arr.properties[0]

    def test_fingerprint_equal_for_equal_trees(self):
        assert _pet().fingerprint() == _pet().fingerprint()
        assert _pet() == _pet()

    def test_fingerprint_sees_nested_changes(self):
        changed = _pet()
        changed.properties[1].required = True
        assert changed.fingerprint() != _pet().fingerprint()

    def test_fingerprint_ignore_name(self):
        assert _pet("a").fingerprint() != _pet("b").fingerprint()
        assert _pet("a").fingerprint(ignore_name=True) == _pet("b").fingerprint(ignore_name=True)

    def test_int_and_float_bounds_compare_equal(self):
        a = DataStructure(name="n", property_type=PropertyType.NUMBER, min=1)
        b = DataStructure(name="n", property_type=PropertyType.NUMBER, min=1.0)
        assert a.fingerprint() == b.fingerprint()

    def test_dict_form(self):
        data = _pet(is_root=True).to_dict()
        assert data["property_type"] == "Object"
        assert data["properties"][0]["format"] == "Int64"
        assert DataStructure.from_dict(data) == _pet(is_root=True)


class TestTemplateData:
    """Test merging endpoint models into the global lists."""

    def test_combine(self):
        data = TemplateData(endpoints=[
            EndpointExtracted(path="/a", method="get", flat_response=[_pet()], flat_request=[_pet("New")]),
            EndpointExtracted(path="/b", method="get", flat_response=[_pet(), _pet("Other")]),
        ])
        data.combine_requests()
        data.combine_responses()
        assert [s.name for s in data.requests] == ["New"]
        assert [s.name for s in data.responses] == ["Pet", "Other"]

    def test_combine_ignoring_names(self):
        data = TemplateData(endpoints=[
            EndpointExtracted(path="/b", method="get", flat_response=[_pet(), _pet("Other")]),
        ])
        data.combine_responses(ignore_names=True)
        assert [s.name for s in data.responses] == ["Pet"]

    def test_extend_unique_keeps_existing(self):
        target = [_pet()]
        extend_unique(target, [_pet(), _pet("x")])
        assert [s.name for s in target] == ["Pet", "x"]

    def test_to_dict(self):
        data = TemplateData(endpoints=[EndpointExtracted(path="/a", method="get", response=_pet())])
        out = data.to_dict()
        assert out["endpoints"][0]["response"]["name"] == "Pet"
        assert out["endpoints"][0]["request"] is None
        assert out["requests"] == []
