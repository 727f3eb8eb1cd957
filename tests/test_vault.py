"""Tests for loading a vault from disk."""

import pytest

from archiexport.vault import load_vault


class TestLoadVault:
    def test_loads_sorted_documents(self, vault_dir):
        docs = load_vault(vault_dir)
        names = [d.name for d in docs]
        assert names == sorted(names)
        assert len(docs) == 9

    def test_skips_hidden_directories(self, vault_dir):
        assert not any(".obsidian" in d.name for d in load_vault(vault_dir))

    def test_nested_names_are_relative_posix(self, vault_dir):
        sub = vault_dir / "phases" / "C"
        sub.mkdir(parents=True)
        (sub / "C2_Data.md").write_text("# Data\n", encoding="utf-8")
        assert "phases/C/C2_Data.md" in [d.name for d in load_vault(vault_dir)]

    def test_ignores_non_markdown(self, vault_dir):
        (vault_dir / "notes.txt").write_text("ignored", encoding="utf-8")
        assert all(d.name.endswith(".md") for d in load_vault(str(vault_dir)))

    def test_single_file(self, vault_dir):
        docs = load_vault(vault_dir / "B1_Business_Architecture.md")
        assert [d.name for d in docs] == ["B1_Business_Architecture.md"]
        assert "User Onboarding" in docs[0].content

    def test_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_vault(tmp_path / "nope")

    def test_empty_directory(self, tmp_path):
        assert load_vault(tmp_path) == []
