"""Tests for manify.docs.loader."""

from pathlib import Path

import pytest

from manify.core.exceptions import ClassNotFoundError
from manify.docs.loader import import_class, load_provider, load_source_file, resolve_class
from manify.docs.models import CommandDescriptor, MethodDoc
from manify.docs.registry import ClassCommandProvider, CommandRegistry, StaticCommandProvider

COMMAND_SOURCE = '''
LOAD_COUNT = []
LOAD_COUNT.append(1)


class Outer:
    class Inner:
        def ping(self):
            """Ping."""


class Report_Command:
    def show(self):
        """Show the report."""


not_a_class = 42
'''


@pytest.fixture
def command_file(tmp_path: Path) -> Path:
    path = tmp_path / "commands" / "report.py"
    path.parent.mkdir()
    path.write_text(COMMAND_SOURCE)
    return path


@pytest.fixture
def empty_registry() -> CommandRegistry:
    registry = CommandRegistry()
    registry._entry_points_loaded = True
    return registry


class TestLoadSourceFile:
    """Test loading command files by path."""

    def test_loads_module(self, command_file):
        """Test the file is executed and its classes are available."""
        module = load_source_file(command_file)
        assert hasattr(module, "Report_Command")

    def test_loads_once(self, command_file):
        """Test a second load reuses the module instead of re-executing it."""
        first = load_source_file(command_file)
        second = load_source_file(command_file)
        assert first is second
        assert first.LOAD_COUNT == [1]

    def test_missing_file(self, tmp_path):
        """Test a missing file raises ClassNotFoundError."""
        with pytest.raises(ClassNotFoundError, match="Command file not found"):
            load_source_file(tmp_path / "nope.py", "Nope")

    def test_broken_file(self, tmp_path):
        """Test a file raising on import is reported as ClassNotFoundError."""
        broken = tmp_path / "broken.py"
        broken.write_text("raise RuntimeError('boom')\n")
        with pytest.raises(ClassNotFoundError, match="boom"):
            load_source_file(broken, "Broken")

    def test_can_import_siblings(self, tmp_path):
        """Test a command file can import modules next to it."""
        (tmp_path / "sibling_helpers_mod.py").write_text("VALUE = 'ok'\n")
        main = tmp_path / "uses_sibling.py"
        main.write_text("from sibling_helpers_mod import VALUE\n\nclass C:\n    pass\n")
        assert load_source_file(main).VALUE == "ok"


class TestResolveClass:
    """Test class resolution inside a module."""

    def test_dotted_name(self, command_file):
        """Test nested classes can be resolved with a dotted name."""
        module = load_source_file(command_file)
        assert resolve_class(module, "Outer.Inner").__name__ == "Inner"

    def test_missing_class(self, command_file):
        """Test a missing class raises ClassNotFoundError."""
        module = load_source_file(command_file)
        with pytest.raises(ClassNotFoundError, match="Class not found: Missing"):
            resolve_class(module, "Missing")

    def test_not_a_class(self, command_file):
        """Test a non-class attribute is rejected."""
        module = load_source_file(command_file)
        with pytest.raises(ClassNotFoundError, match="Not a class"):
            resolve_class(module, "not_a_class")


class TestImportClass:
    """Test importing classes by module path."""

    def test_colon_syntax(self):
        """Test module:Class paths."""
        assert import_class("manify.docs.registry:CommandRegistry") is CommandRegistry

    def test_dotted_syntax(self):
        """Test module.Class paths."""
        assert import_class("manify.docs.registry.CommandRegistry") is CommandRegistry

    def test_unknown_module(self):
        """Test an unknown module raises ClassNotFoundError."""
        with pytest.raises(ClassNotFoundError):
            import_class("no_such_package_xyz.Thing")

    def test_bare_name(self):
        """Test a bare class name cannot be imported."""
        with pytest.raises(ClassNotFoundError):
            import_class("Thing")


class TestLoadProvider:
    """Test descriptor to provider resolution."""

    def test_from_source_file(self, command_file, empty_registry):
        """Test descriptors with a file are loaded from it."""
        descriptor = CommandDescriptor(
            command_name="report",
            class_name="Report_Command",
            source_file=Path("report.py"),
            base_directory=command_file.parent,
        )
        provider = load_provider(descriptor, empty_registry)
        assert isinstance(provider, ClassCommandProvider)
        assert provider.cls.__name__ == "Report_Command"
        assert provider.descriptor is descriptor

    def test_missing_source_file(self, tmp_path, empty_registry):
        """Test a missing file is a ClassNotFoundError."""
        descriptor = CommandDescriptor(
            command_name="report",
            class_name="Report_Command",
            source_file=Path("missing.py"),
            base_directory=tmp_path,
        )
        with pytest.raises(ClassNotFoundError, match="Command file not found"):
            load_provider(descriptor, empty_registry)

    def test_registered_class(self, empty_registry):
        """Test list-shape descriptors resolve through the registry."""

        class Cache:
            def flush(self):
                """Flush."""

        empty_registry.register("cache", Cache)
        provider = load_provider(CommandDescriptor(command_name="cache"), empty_registry)
        assert provider.cls is Cache

    def test_registered_provider(self, empty_registry):
        """Test a registered provider is returned as is."""
        static = StaticCommandProvider(
            CommandDescriptor(command_name="cache"),
            [MethodDoc(method_name="flush", subcommand_name="flush")],
        )
        empty_registry.register("cache", static)
        assert load_provider(CommandDescriptor(command_name="cache"), empty_registry) is static

    def test_import_path_without_file(self, empty_registry):
        """Test a class name without file is imported as a module path."""
        descriptor = CommandDescriptor(
            command_name="registry", class_name="manify.docs.registry:CommandRegistry"
        )
        assert load_provider(descriptor, empty_registry).cls is CommandRegistry

    def test_unregistered_command(self, empty_registry):
        """Test an unknown list-shape command raises ClassNotFoundError."""
        with pytest.raises(ClassNotFoundError, match="No class registered"):
            load_provider(CommandDescriptor(command_name="ghost"), empty_registry)

    def test_registered_garbage(self, empty_registry):
        """Test a registered object that is neither class nor provider is rejected."""
        empty_registry.register("odd", 42)  # type: ignore[arg-type]
        with pytest.raises(ClassNotFoundError, match="neither a class nor a provider"):
            load_provider(CommandDescriptor(command_name="odd"), empty_registry)
