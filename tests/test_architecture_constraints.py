"""
Tests to enforce architecture constraints and prevent regressions.

These tests verify that the layered architecture is maintained:
- Domain layer: Pure wheel geometry and physics, no rendering or host loop
- Service layer: The wheel facade, depends on domain and the spin tracer
- Infrastructure layer: Tick schedulers and clocks for the host loop
- Rendering: Pillow drawing, consumes the facade
"""

import ast
from pathlib import Path

RENDERING_MODULES = ("PIL", "pilmoji", "utils.wheel_drawing")


def get_project_root() -> Path:
    """Get the project root directory."""
    # Tests are in tests/, so go up one level
    return Path(__file__).parent.parent


def get_imports_from_file(file_path: Path) -> set[str]:
    """Extract all import statements from a Python file."""
    imports = set()
    with open(file_path, "r", encoding="utf-8") as f:
        tree = ast.parse(f.read(), filename=str(file_path))

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                imports.add(alias.name)
        elif isinstance(node, ast.ImportFrom):
            if node.module:
                imports.add(node.module)
    return imports


def get_all_python_files(directory: Path) -> list[Path]:
    """Get all Python files in a directory recursively."""
    return list(directory.rglob("*.py"))


def _matching(imports: set[str], prefixes: tuple[str, ...]) -> list[str]:
    return sorted(imp for imp in imports if imp.startswith(prefixes))


class TestDomainLayerConstraints:
    """Tests for domain layer architecture constraints."""

    def test_domain_has_no_rendering_imports(self):
        """Geometry and physics must not depend on Pillow."""
        for file_path in get_all_python_files(get_project_root() / "domain"):
            found = _matching(get_imports_from_file(file_path), RENDERING_MODULES)
            assert not found, f"{file_path.name} imports rendering modules: {found}"

    def test_domain_has_no_host_loop_imports(self):
        """Domain code is driven by timestamps, never by an event loop."""
        for file_path in get_all_python_files(get_project_root() / "domain"):
            found = _matching(get_imports_from_file(file_path), ("asyncio", "infrastructure"))
            assert not found, f"{file_path.name} imports host loop modules: {found}"

    def test_domain_does_not_import_the_facade(self):
        for file_path in get_all_python_files(get_project_root() / "domain"):
            found = _matching(get_imports_from_file(file_path), ("services.wheel_service",))
            assert not found, f"{file_path.name} imports the wheel facade"

    def test_domain_does_not_import_services(self):
        """Error codes and everything else the domain needs live under domain/."""
        for file_path in get_all_python_files(get_project_root() / "domain"):
            found = _matching(get_imports_from_file(file_path), ("services",))
            assert not found, f"{file_path.name} imports the service layer: {found}"

    def test_domain_does_not_trace(self):
        """Spin tracing happens in the facade, which knows the current item."""
        for file_path in get_all_python_files(get_project_root() / "domain"):
            found = _matching(get_imports_from_file(file_path), ("utils.debug_logging",))
            assert not found, f"{file_path.name} imports the tracer: {found}"


class TestServiceLayerConstraints:
    """Tests for service layer architecture constraints."""

    def test_services_do_not_render(self):
        for file_path in get_all_python_files(get_project_root() / "services"):
            found = _matching(get_imports_from_file(file_path), RENDERING_MODULES)
            assert not found, f"{file_path.name} imports rendering modules: {found}"

    def test_services_do_not_depend_on_concrete_schedulers(self):
        """The facade talks to ITickScheduler, not to a concrete scheduler."""
        for file_path in get_all_python_files(get_project_root() / "services"):
            found = _matching(get_imports_from_file(file_path), ("infrastructure", "asyncio"))
            assert not found, f"{file_path.name} imports infrastructure: {found}"
