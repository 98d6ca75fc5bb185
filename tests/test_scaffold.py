"""Tests for the scaffold module."""

from schemagen.codegen import generate
from schemagen.config import load_config
from schemagen.context_builder import build_context
from schemagen.scaffold import init


class TestInit:
    """Test project initialisation."""

    def test_creates_files(self, tmp_path):
        created = init(tmp_path)
        assert sorted(p.relative_to(tmp_path).as_posix() for p in created) == [
            "config.yaml",
            "templates/model.template",
            "templates/service.template",
        ]

    def test_config_is_valid(self, tmp_path):
        init(tmp_path)
        config = load_config(cwd=tmp_path)
        assert config.array_layout == "List<{type}>"
        assert config.extended["package"] == "api_client"

    def test_existing_files_kept(self, tmp_path):
        (tmp_path / "config.yaml").write_text("custom: true\n")
        created = init(tmp_path)
        assert (tmp_path / "config.yaml").read_text() == "custom: true\n"
        assert tmp_path / "config.yaml" not in created
        assert len(created) == 2

    def test_second_run_creates_nothing(self, tmp_path):
        init(tmp_path)
        assert init(tmp_path) == []

    def test_starter_templates_render(self, tmp_path, petstore):
        init(tmp_path)
        config = load_config(cwd=tmp_path)
        data = build_context(petstore, config)
        written = generate(data, config, tmp_path / "out", tmp_path / "templates")

        names = {p.name for p in written}
        assert names == {"service.template", "new_pet.dart", "pet.dart", "owner.dart"}
        pet = (tmp_path / "out" / "pet.dart").read_text()
        assert "class Pet {" in pet
        assert "final int id;" in pet
        assert "final String? tag;" in pet
        service = (tmp_path / "out" / "service.template").read_text()
        assert "// api_client: 6 endpoints" in service
