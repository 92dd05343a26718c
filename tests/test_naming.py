"""Tests for name generation and collision resolution."""

from __future__ import annotations

import os
import uuid
from pathlib import Path

import pytest

from uuidify.naming import CollisionResolver, NameGenerator, extension_of


def _tokens(*values: str):
    iterator = iter(values)
    return lambda: next(iterator)


def test_generate_keeps_extension_and_uses_uppercase_uuid() -> None:
    name = NameGenerator().generate("txt")

    stem, _, extension = name.rpartition(".")
    assert extension == "txt"
    assert stem == stem.upper()
    assert uuid.UUID(stem).version == 4


def test_generate_without_extension_has_no_suffix() -> None:
    name = NameGenerator().generate("")

    assert "." not in name
    assert uuid.UUID(name)


def test_generate_tolerates_leading_dot() -> None:
    name = NameGenerator(_tokens("abc")).generate(".png")

    assert name == "abc.png"


def test_generate_lowercase_option() -> None:
    name = NameGenerator(uppercase=False).generate("md")

    assert name == name.lower()


def test_generate_returns_fresh_tokens() -> None:
    generator = NameGenerator()

    names = {generator.generate("bin") for _ in range(50)}

    assert len(names) == 50


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("photo.JPG", "JPG"),
        ("archive.tar.gz", "gz"),
        (".bashrc", ""),
        ("README", ""),
        ("trailing.", ""),
    ],
)
def test_extension_of(name: str, expected: str) -> None:
    assert extension_of(name) == expected


def test_resolver_skips_existing_names(tmp_path: Path) -> None:
    (tmp_path / "AAA.txt").write_text("taken", encoding="utf-8")
    resolver = CollisionResolver(NameGenerator(_tokens("AAA", "BBB")))

    assert resolver.resolve(tmp_path, "txt") == tmp_path / "BBB.txt"


def test_resolver_treats_dangling_symlink_as_taken(tmp_path: Path) -> None:
    os.symlink(tmp_path / "missing", tmp_path / "AAA.txt")
    resolver = CollisionResolver(NameGenerator(_tokens("AAA", "BBB")))

    assert resolver.resolve(tmp_path, "txt") == tmp_path / "BBB.txt"


def test_resolver_honours_reserved_paths(tmp_path: Path) -> None:
    resolver = CollisionResolver(NameGenerator(_tokens("AAA", "BBB")))

    resolved = resolver.resolve(tmp_path, "", reserved={tmp_path / "AAA"})

    assert resolved == tmp_path / "BBB"


def test_resolver_falls_back_to_counter_when_generator_repeats(tmp_path: Path) -> None:
    calls: list[int] = []

    def _stuck() -> str:
        calls.append(1)
        return "SAME"

    (tmp_path / "SAME.txt").write_text("x", encoding="utf-8")
    (tmp_path / "SAME-1.txt").write_text("x", encoding="utf-8")
    resolver = CollisionResolver(NameGenerator(_stuck), max_attempts=3)

    resolved = resolver.resolve(tmp_path, "txt")

    assert resolved == tmp_path / "SAME-2.txt"
    assert len(calls) == 3
