"""Locked version constraints.

A locked ``version`` is a constraint on the resolved version, not plain text.
``VersionPattern`` makes the kind of constraint explicit:

* ``literal`` matches only the identical string.
* ``regex`` matches when the whole candidate matches the expression.
* ``glob`` matches with shell-style wildcards (``*``, ``?``, ``[...]``).

Which kind a manifest string becomes is decided by the configured syntax.
Under the default ``regex`` syntax, text without any of ``\\^$*?()[]{}|`` is a
literal, so ``1.2.3`` never matches ``1x2x3``. ``exact`` escapes a resolved
version so that its written text parses back to the same single-version
pattern.
"""

from __future__ import annotations

import glob
import re
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Literal

from deplock.errors import ValidationError

VersionSyntax = Literal["regex", "glob", "literal"]
PatternKind = Literal["literal", "regex", "glob"]

_REGEX_CHARS = frozenset("\\^$*?()[]{}|")
_GLOB_CHARS = frozenset("*?[")
_REGEX_ESCAPE = re.compile(r"\\(.)", re.DOTALL)
_GLOB_ESCAPE = re.compile(r"\[(.)\]", re.DOTALL)


@dataclass(frozen=True, slots=True)
class VersionPattern:
    kind: PatternKind
    text: str

    @classmethod
    def literal(cls, text: str) -> VersionPattern:
        return cls(kind="literal", text=text)

    @classmethod
    def exact(cls, version: str, syntax: VersionSyntax = "regex") -> VersionPattern:
        """A pattern matching only ``version`` whose text reparses to itself."""
        if syntax == "regex" and not _REGEX_CHARS.isdisjoint(version):
            return cls(kind="regex", text=re.escape(version))
        if syntax == "glob" and not _GLOB_CHARS.isdisjoint(version):
            return cls(kind="glob", text=glob.escape(version))
        return cls.literal(version)

    @classmethod
    def parse(cls, text: str, syntax: VersionSyntax = "regex") -> VersionPattern:
        if syntax == "literal":
            return cls.literal(text)
        if syntax == "glob":
            if _GLOB_CHARS.isdisjoint(text):
                return cls.literal(text)
            return cls(kind="glob", text=text)
        if syntax != "regex":
            raise ValidationError(
                f"Unknown version syntax {syntax!r}.",
                hint="Use one of: regex, glob, literal.",
            )
        if _REGEX_CHARS.isdisjoint(text):
            return cls.literal(text)
        try:
            re.compile(text)
        except re.error as exc:
            raise ValidationError(
                f"Invalid version pattern {text!r}.",
                hint=str(exc),
                context={"version": text},
            ) from exc
        return cls(kind="regex", text=text)

    def matches(self, candidate: str) -> bool:
        if self.kind == "literal":
            return candidate == self.text
        if self.kind == "glob":
            return fnmatchcase(candidate, self.text)
        return re.fullmatch(self.text, candidate) is not None

    def exact_text(self) -> str:
        """The one version this pattern matches when built by ``exact``, else its text."""
        if self.kind == "regex":
            unescaped = _REGEX_ESCAPE.sub(r"\1", self.text)
            if re.escape(unescaped) == self.text:
                return unescaped
        elif self.kind == "glob":
            unescaped = _GLOB_ESCAPE.sub(r"\1", self.text)
            if glob.escape(unescaped) == self.text:
                return unescaped
        return self.text

    def __str__(self) -> str:
        return self.text


__all__ = ["PatternKind", "VersionPattern", "VersionSyntax"]
