"""
Tests for dynamic engine plugin loading.
"""

import pytest

from codeanalyzer.core.errors import PluginLoadError
from codeanalyzer.core.plugin_loader import ImportlibPluginLoader
from codeanalyzer.engines.regex.plugin import RegexEnginePlugin

from stub_plugins import StubEnginePlugin


def test_loads_plugin_by_module_name():
    plugin = ImportlibPluginLoader().load("codeanalyzer.engines.regex.plugin")
    assert isinstance(plugin, RegexEnginePlugin)


def test_loads_plugin_from_file_path(tmp_path):
    plugin_file = tmp_path / "my_plugin.py"
    plugin_file.write_text(
        "from codeanalyzer.engines.regex.plugin import RegexEnginePlugin\n"
        "\n"
        "def create_engine_plugin():\n"
        "    return RegexEnginePlugin()\n"
    )
    plugin = ImportlibPluginLoader().load(str(plugin_file))
    assert plugin.get_available_engine_names() == ["regex"]


def test_missing_module_raises_load_error():
    with pytest.raises(PluginLoadError, match="no_such_plugin_module"):
        ImportlibPluginLoader().load("no_such_plugin_module")


def test_missing_file_raises_load_error(tmp_path):
    with pytest.raises(PluginLoadError, match="Failed to load"):
        ImportlibPluginLoader().load(str(tmp_path / "absent.py"))


def test_module_without_factory_raises_load_error(tmp_path):
    plugin_file = tmp_path / "not_a_plugin.py"
    plugin_file.write_text("VALUE = 1\n")
    with pytest.raises(PluginLoadError, match="create_engine_plugin"):
        ImportlibPluginLoader().load(str(plugin_file))


def test_module_raising_on_import_raises_load_error(tmp_path):
    plugin_file = tmp_path / "explodes.py"
    plugin_file.write_text("raise RuntimeError('boom at import')\n")
    with pytest.raises(PluginLoadError, match="boom at import"):
        ImportlibPluginLoader().load(str(plugin_file))


@pytest.mark.asyncio
async def test_analyzer_registers_dynamically_loaded_engines(analyzer):
    await analyzer.dynamically_add_engine_plugin("stub_plugins")
    assert analyzer.get_engine_names() == ["stubEngine1", "stubEngine2"]


@pytest.mark.asyncio
async def test_analyzer_uses_injected_loader(analyzer):
    class FixedLoader:
        def __init__(self):
            self.refs = []

        def load(self, module_ref):
            self.refs.append(module_ref)
            return StubEnginePlugin()

    loader = FixedLoader()
    analyzer.plugin_loader = loader
    await analyzer.dynamically_add_engine_plugin("anything")
    assert loader.refs == ["anything"]
    assert "stubEngine1" in analyzer.get_engine_names()
