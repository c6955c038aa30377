"""The version command."""

from __future__ import annotations

import argparse
import json
import re
from dataclasses import dataclass, field
from importlib import metadata

FORMAT_TEXT = "text"
FORMAT_INLINE = "inline"
FORMAT_JSON = "json"


@dataclass(frozen=True)
class Dependency:
    path: str
    version: str


@dataclass
class VersionInfo:
    version: str
    dependencies: list[Dependency] = field(default_factory=list)

    def to_json(self) -> str:
        deps = [{"package": d.path, "version": d.version} for d in self.dependencies]
        return json.dumps(
            {"version": self.version, "dependencies": deps or None},
            separators=(",", ":"),
        )

    def render(self, fmt: str, verbose: bool = False) -> str:
        if fmt in (FORMAT_INLINE, FORMAT_TEXT):
            text = f"Version: {self.version}\n"
            if verbose:
                text += "\nFlow Package Dependencies \n"
                text += "".join(f"{d.path} {d.version}\n" for d in self.dependencies)
            return text
        if fmt == FORMAT_JSON:
            return self.to_json()
        raise ValueError(f"unsupported format: {fmt}")


def _collect() -> VersionInfo:
    try:
        version = metadata.version("flowcli")
        requires = metadata.requires("flowcli") or []
    except metadata.PackageNotFoundError:
        return VersionInfo("undefined")
    deps = []
    for requirement in requires:
        name = re.split(r"[\s<>=!~;\[]", requirement, maxsplit=1)[0]
        try:
            deps.append(Dependency(name, metadata.version(name)))
        except metadata.PackageNotFoundError:
            continue
    return VersionInfo(version, deps)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="flow version", description="View version information")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show detailed dependency information")
    parser.add_argument("--format", default=FORMAT_TEXT)
    args = parser.parse_args(argv)
    try:
        print(_collect().render(args.format, args.verbose))
    except ValueError as err:
        parser.exit(1, f"{err}\n")
    return 0