"""Tests for the command-line file pickers."""

from unittest.mock import patch

import click

from jornadas.adapters.prompt_picker import FixedPathPicker, PromptFilePicker


class TestPromptFilePicker:
    @patch("jornadas.adapters.prompt_picker.click.prompt")
    def test_relative_answer_resolved_against_directory(self, mock_prompt, tmp_path):
        mock_prompt.return_value = " liga.json "
        picker = PromptFilePicker(tmp_path)
        assert picker.pick_open() == tmp_path / "liga.json"

    @patch("jornadas.adapters.prompt_picker.click.prompt")
    def test_empty_answer_cancels(self, mock_prompt, tmp_path):
        mock_prompt.return_value = ""
        assert PromptFilePicker(tmp_path).pick_save("liga.json") is None

    @patch("jornadas.adapters.prompt_picker.click.prompt")
    def test_abort_cancels(self, mock_prompt, tmp_path):
        mock_prompt.side_effect = click.Abort()
        assert PromptFilePicker(tmp_path).pick_open() is None

    @patch("jornadas.adapters.prompt_picker.click.prompt")
    def test_save_into_directory(self, mock_prompt, tmp_path):
        (tmp_path / "sub").mkdir()
        mock_prompt.return_value = "sub"
        assert PromptFilePicker(tmp_path).pick_save("liga.json") == tmp_path / "sub" / "liga.json"

    @patch("jornadas.adapters.prompt_picker.click.confirm")
    @patch("jornadas.adapters.prompt_picker.click.prompt")
    def test_declined_overwrite_cancels(self, mock_prompt, mock_confirm, tmp_path):
        (tmp_path / "liga.json").write_text("[]")
        mock_prompt.return_value = "liga.json"
        mock_confirm.return_value = False
        assert PromptFilePicker(tmp_path).pick_save("liga.json") is None

    @patch("jornadas.adapters.prompt_picker.click.confirm")
    @patch("jornadas.adapters.prompt_picker.click.prompt")
    def test_accepted_overwrite(self, mock_prompt, mock_confirm, tmp_path):
        (tmp_path / "liga.json").write_text("[]")
        mock_prompt.return_value = "liga.json"
        mock_confirm.return_value = True
        assert PromptFilePicker(tmp_path).pick_save("liga.json") == tmp_path / "liga.json"


class TestFixedPathPicker:
    def test_file_path(self, tmp_path):
        picker = FixedPathPicker(tmp_path / "a.json")
        assert picker.pick_open() == tmp_path / "a.json"
        assert picker.pick_save("b.json") == tmp_path / "a.json"

    def test_directory_uses_suggested_name(self, tmp_path):
        assert FixedPathPicker(tmp_path).pick_save("b.json") == tmp_path / "b.json"
