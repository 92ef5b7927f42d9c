from enum import Enum
from string import Template
from typing import NamedTuple

# Command templates per package manager
INSTALL_TEMPLATES = {
    "pnpm": Template("pnpm add $name"),
    "npm": Template("npm install $name"),
    "yarn": Template("yarn add $name"),
}
DEPENDENCY_TEMPLATE = Template('"$name": "$version"')
TARBALL_URL_TEMPLATE = Template("$base/$name/tarball/$version")


class PackageManager(str, Enum):
    """Clients an install command can be generated for."""

    PNPM = "pnpm"
    NPM = "npm"
    YARN = "yarn"


class InstallSnippet(NamedTuple):
    """Copyable install command plus the matching package.json entry."""

    command: str
    dependency: str


def install_command(name: str, manager: PackageManager | str = PackageManager.PNPM) -> str:
    """Build the one-line install command. Unknown managers raise ValueError."""
    return INSTALL_TEMPLATES[PackageManager(manager).value].substitute(name=name)


def dependency_fragment(name: str, version: str) -> str:
    """Build a `"name": "version"` entry for a package.json dependencies block."""
    return DEPENDENCY_TEMPLATE.substitute(name=name, version=version)


def install_snippet(
    name: str, version: str, manager: PackageManager | str = PackageManager.PNPM
) -> InstallSnippet:
    return InstallSnippet(
        command=install_command(name, manager),
        dependency=dependency_fragment(name, version),
    )


def tarball_url(registry_base: str, name: str, version: str) -> str:
    """Link to a version's tarball on the registry worker."""
    return TARBALL_URL_TEMPLATE.substitute(
        base=registry_base.rstrip("/"), name=name, version=version
    )


def latest_tarball_url(registry_base: str, name: str) -> str:
    return tarball_url(registry_base, name, "latest")
