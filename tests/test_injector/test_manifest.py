"""Tests for mix.exs dependency injection (catalyst.injector.manifest)."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from catalyst.errors import AnchorNotFoundError
from catalyst.injector import Atom, DependencyRecord, dep, inject_dependencies, inject_dependency


pytestmark = pytest.mark.unit

BARE_MANIFEST = 'defmodule M do\n  defp deps do\n  end\nend\n'


@pytest.fixture
def bare_manifest(tmp_path: Path) -> Path:
    path = tmp_path / "mix.exs"
    path.write_text(BARE_MANIFEST)
    return path


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestDependencyRecord:
    def test_render_without_options(self):
        assert dep("oban", "~> 2.17").render() == '{:oban, "~> 2.17"}'

    def test_render_with_keyword_options(self):
        record = dep("credo", "~> 1.7", only=[Atom("dev"), Atom("test")], runtime=False)
        assert record.render() == '{:credo, "~> 1.7", [only: [:dev, :test], runtime: false]}'

    def test_render_single_atom_option(self):
        record = dep("ex_machina", "~> 2.7", only=Atom("test"))
        assert record.render() == '{:ex_machina, "~> 2.7", [only: :test]}'

    def test_render_string_option_is_quoted(self):
        record = dep("thing", ">= 0.0.0", github="org/thing")
        assert record.render() == '{:thing, ">= 0.0.0", [github: "org/thing"]}'

    def test_str_is_rendering(self):
        assert str(dep("httpoison", "~> 2.0")) == '{:httpoison, "~> 2.0"}'

    def test_invalid_name_rejected(self):
        with pytest.raises(ValidationError):
            DependencyRecord(name="Bad-Name", requirement="~> 1.0")

    def test_records_are_frozen(self):
        record = dep("oban", "~> 2.17")
        with pytest.raises(ValidationError):
            record.name = "other"

    def test_unrenderable_option_raises(self):
        with pytest.raises(TypeError):
            dep("x", "~> 1.0", weird=object()).render()


# ---------------------------------------------------------------------------
# Injection
# ---------------------------------------------------------------------------


class TestInjectDependencies:
    def test_inserts_immediately_after_anchor(self, bare_manifest: Path):
        result = inject_dependency(bare_manifest, dep("httpoison", "~> 2.0"))
        content = bare_manifest.read_text()
        assert content == 'defmodule M do\n  defp deps do\n    {:httpoison, "~> 2.0"},\n  end\nend\n'
        assert result.inserted == [dep("httpoison", "~> 2.0")]
        assert result.changed

    def test_second_injection_is_noop(self, bare_manifest: Path):
        inject_dependency(bare_manifest, dep("httpoison", "~> 2.0"))
        before = bare_manifest.read_bytes()
        result = inject_dependency(bare_manifest, dep("httpoison", "~> 2.0"))
        assert bare_manifest.read_bytes() == before
        assert bare_manifest.read_text().count('{:httpoison, "~> 2.0"}') == 1
        assert result.present and not result.changed

    def test_later_insertions_sit_closer_to_anchor(self, bare_manifest: Path):
        inject_dependencies(bare_manifest, [dep("a_dep", "~> 1.0"), dep("b_dep", "~> 1.0")])
        content = bare_manifest.read_text()
        assert content.index(":b_dep") < content.index(":a_dep")

    def test_inserts_inside_generated_list(self, phoenix_root: Path):
        manifest = phoenix_root / "mix.exs"
        inject_dependency(manifest, dep("oban", "~> 2.17"))
        content = manifest.read_text()
        assert '  defp deps do\n    [\n      {:oban, "~> 2.17"},\n      {:phoenix, ' in content

    def test_preserves_unrelated_bytes(self, phoenix_root: Path):
        manifest = phoenix_root / "mix.exs"
        original = manifest.read_text()
        inject_dependency(manifest, dep("oban", "~> 2.17"))
        assert manifest.read_text().replace('\n      {:oban, "~> 2.17"},', "", 1) == original

    def test_conflicting_constraint_is_not_inserted(self, phoenix_root: Path):
        manifest = phoenix_root / "mix.exs"
        before = manifest.read_bytes()
        result = inject_dependency(manifest, dep("swoosh", "~> 1.11"))
        assert result.conflicts == [dep("swoosh", "~> 1.11")]
        assert manifest.read_bytes() == before

    def test_commented_out_declaration_is_not_a_conflict(self, tmp_path: Path):
        manifest = tmp_path / "mix.exs"
        manifest.write_text('defp deps do\n  [\n    # {:oban, "~> 2.0"},\n    {:jason, "~> 1.2"}\n  ]\nend\n')
        result = inject_dependency(manifest, dep("oban", "~> 2.17"))
        assert result.inserted == [dep("oban", "~> 2.17")]
        assert result.conflicts == []
        assert '  [\n    {:oban, "~> 2.17"},\n    # {:oban, "~> 2.0"},' in manifest.read_text()

    def test_missing_anchor_raises_and_leaves_file(self, tmp_path: Path):
        manifest = tmp_path / "mix.exs"
        manifest.write_text("defmodule M do\nend\n")
        with pytest.raises(AnchorNotFoundError) as exc_info:
            inject_dependency(manifest, dep("oban", "~> 2.17"))
        assert "defp deps do" in str(exc_info.value)
        assert manifest.read_text() == "defmodule M do\nend\n"

    def test_missing_anchor_is_fine_when_nothing_to_insert(self, tmp_path: Path):
        manifest = tmp_path / "mix.exs"
        manifest.write_text('# {:oban, "~> 2.17"}\n')
        result = inject_dependency(manifest, dep("oban", "~> 2.17"))
        assert result.present == [dep("oban", "~> 2.17")]

    def test_only_first_anchor_used(self, tmp_path: Path):
        manifest = tmp_path / "mix.exs"
        manifest.write_text("defp deps do\nend\n# defp deps do\n")
        inject_dependency(manifest, dep("oban", "~> 2.17"))
        assert manifest.read_text().count(":oban") == 1

    def test_custom_anchor(self, tmp_path: Path):
        manifest = tmp_path / "mix.exs"
        manifest.write_text("defp project_deps do\nend\n")
        inject_dependency(manifest, dep("oban", "~> 2.17"), anchor="defp project_deps do")
        assert manifest.read_text().startswith('defp project_deps do\n    {:oban, "~> 2.17"},')

    def test_crlf_bytes_outside_insertion_preserved(self, tmp_path: Path):
        manifest = tmp_path / "mix.exs"
        manifest.write_bytes(b"defp deps do\r\n  [\r\n  ]\r\nend\r\n")
        inject_dependency(manifest, dep("oban", "~> 2.17"))
        assert manifest.read_bytes().startswith(b"defp deps do\r\n  [\n    {:oban, \"~> 2.17\"},\r\n  ]")
