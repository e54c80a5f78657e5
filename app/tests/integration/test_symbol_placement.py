"""Integration tests for the symbol placement lifecycle.

Covers:
- Placing symbols through SchematicController with a render backend
- Editing parameters and toggling the distribution block cover
- Multi-select delete
- Save/load round trip through SchematicModel.to_dict/from_dict with
  visuals rebuilt by reload_visuals()
"""

import json

import pytest
from controllers.schematic_controller import SchematicController
from controllers.symbol_builder import SymbolBuilder
from models.schematic import SchematicModel
from symbols.constants import DISTRIBUTION_BLOCK_HEIGHT, DISTRIBUTION_BLOCK_WIDTH, SCALE_FACTOR
from symbols.templates import TemplateCache


@pytest.fixture
def controller(fake_backend):
    builder = SymbolBuilder(render_backend=fake_backend, template_cache=TemplateCache())
    return SchematicController(builder=builder)


@pytest.fixture
def events(controller):
    received = []
    controller.add_observer(lambda event, data: received.append(event))
    return received


def _last_markup(backend):
    return backend.markup_calls[-1][0]


class TestPlacementLifecycle:
    def test_place_edit_and_delete(self, controller, fake_backend, template_dir, events):
        mcb = controller.place_symbol(template_dir / "MCB 1P.svg", "MCB", "MCB", drop_point=(500, 300))
        block = controller.place_symbol(
            template_dir / "Blok rozdzielczy 4P.svg", "Distribution", "Blok", drop_point=(100, 100)
        )
        assert [s.symbol_id for s in controller.model.symbols] == ["S1", "S2"]
        assert mcb.width == pytest.approx(200 * SCALE_FACTOR)
        assert mcb.position == (500.0, 300.0)
        assert block.width == pytest.approx(DISTRIBUTION_BLOCK_WIDTH)
        assert block.height == pytest.approx(DISTRIBUTION_BLOCK_HEIGHT)
        assert block.parameters["BLUE_COVER_VISIBLE"] == "True"
        assert 'display="none"' not in _last_markup(fake_backend)

        controller.update_symbol_parameters("S1", {**mcb.parameters, "CURRENT": "16A"})
        assert ">16A<" in _last_markup(fake_backend)
        assert mcb.position == (500.0, 300.0)

        controller.update_symbol_parameters("S2", {**block.parameters, "BLUE_COVER_VISIBLE": "False"})
        hidden = _last_markup(fake_backend)
        assert hidden.count('display="none"') == 3

        controller.update_symbol_parameters("S2", {**block.parameters, "BLUE_COVER_VISIBLE": "True"})
        assert 'display="none"' not in _last_markup(fake_backend)

        controller.select_symbol("S1")
        controller.select_symbol("S2", additive=True)
        removed = controller.delete_selected()
        assert {s.symbol_id for s in removed} == {"S1", "S2"}
        assert controller.model.symbols == []

        assert events == [
            "symbol_added",
            "symbol_added",
            "symbol_parameters_changed",
            "symbol_parameters_changed",
            "symbol_parameters_changed",
            "selection_changed",
            "selection_changed",
            "symbol_removed",
            "symbol_removed",
        ]

    def test_unloadable_template_still_places(self, controller, template_dir):
        symbol = controller.place_symbol(template_dir / "notes.txt", drop_point=(10, 10))
        assert symbol in controller.model.symbols
        assert symbol.width == 0.0
        assert not symbol.has_visual

    def test_raster_template(self, controller, fake_backend, template_dir):
        symbol = controller.place_symbol(template_dir / "photo.png", "Photo", "Photo")
        assert symbol.width == 64.0
        assert symbol.height == 32.0
        assert symbol.visual == ("raster", len(fake_backend.raster_calls[0]))


class TestSaveLoadRoundTrip:
    def test_round_trip_rebuilds_visuals(self, controller, fake_backend, template_dir, events):
        controller.place_symbol(template_dir / "MCB 1P.svg", "MCB", "MCB", drop_point=(50, 60))
        block = controller.place_symbol(template_dir / "Blok rozdzielczy 4P.svg", "Distribution", "Blok")
        controller.update_symbol_parameters(block.symbol_id, {**block.parameters, "BLUE_COVER_VISIBLE": "False"})

        saved = json.dumps(controller.model.to_dict())
        restored = SchematicModel.from_dict(json.loads(saved))
        assert all(s.visual is None for s in restored.symbols)

        fake_backend.markup_calls.clear()
        controller.load_model(restored)

        assert events[-1] == "symbols_reloaded"
        assert len(fake_backend.markup_calls) == 2
        assert all(s.has_visual for s in controller.model.symbols)
        assert 'display="none"' in _last_markup(fake_backend)
        assert controller.model.get_symbol("S1").position == (50.0, 60.0)
        assert controller.model.next_symbol_id() == "S3"

    def test_missing_template_on_reload(self, controller, template_dir, tmp_path):
        path = tmp_path / "gone.svg"
        path.write_text((template_dir / "MCB 1P.svg").read_text(encoding="utf-8"), encoding="utf-8")
        controller.builder.template_cache = None
        symbol = controller.place_symbol(path)
        width = symbol.width
        path.unlink()

        controller.reload_visuals()
        assert symbol.width == width
