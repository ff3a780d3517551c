"""
Import checks for the hotrefactor package.
"""

import importlib
import pkgutil

import hotrefactor


class TestPackage:
    """Every module imports cleanly and the lazy exports resolve."""

    def test_every_module_imports(self):
        names = [
            info.name
            for info in pkgutil.walk_packages(hotrefactor.__path__, "hotrefactor.")
        ]
        assert "hotrefactor.refactoring.using_groups" in names
        for name in names:
            importlib.import_module(name)

    def test_lazy_exports(self):
        for name in hotrefactor.__all__:
            assert getattr(hotrefactor, name) is not None
