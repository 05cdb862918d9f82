"""
Pylint plugin entry point - composition root for the checker plugin.
Lives in infrastructure as it creates the container and wires dependencies.

Usage: pylint --load-plugins=underscore_naming_linter.infrastructure.checker <paths>
"""

from pylint.lint import PyLinter

from underscore_naming_linter.infrastructure.di.container import NamingContainer
from underscore_naming_linter.use_cases.checks.naming import NamingConventionChecker


def register(linter: PyLinter) -> None:
    """Register checkers."""
    container = NamingContainer.get_instance()
    linter.register_checker(
        NamingConventionChecker(
            linter,
            symbol_gateway=container.get_symbol_gateway(),
            rule=container.get_naming_rule(),
        )
    )
