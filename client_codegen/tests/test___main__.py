from unittest.mock import patch

import pytest

from client_codegen import __main__


class TestCmdFunctions:
    @patch("client_codegen.api_codegen.main.main")
    def test_cmd_generate_success(self, mock_main):
        result = __main__.cmd_generate(["petstore.yaml"])
        assert result == 0
        mock_main.assert_called_once_with(["petstore.yaml"])

    @patch("client_codegen.api_codegen.main.main")
    def test_cmd_generate_failure(self, mock_main):
        mock_main.side_effect = SystemExit(1)
        result = __main__.cmd_generate([])
        assert result == 1

    @patch("client_codegen.api_codegen.main.main")
    def test_cmd_generate_message_exit(self, mock_main):
        mock_main.side_effect = SystemExit("No API document given")
        result = __main__.cmd_generate([])
        assert result == 1

    @patch("client_codegen.clean.main")
    def test_cmd_clean_success(self, mock_main):
        result = __main__.cmd_clean([])
        assert result == 0
        mock_main.assert_called_once()

    @patch("client_codegen.clean.main")
    def test_cmd_clean_failure(self, mock_main):
        mock_main.side_effect = SystemExit(1)
        result = __main__.cmd_clean([])
        assert result == 1


class TestCmdResolve:
    def test_array_of_refs(self, capsys):
        result = __main__.cmd_resolve(['{"type": "array", "items": {"$ref": "#/definitions/Widget"}}'])

        assert result == 0
        out = capsys.readouterr().out
        assert "type:     api.Widget[]" in out
        assert "doc type: module:types.Widget[]" in out
        assert "enum:" not in out

    def test_types_module(self, capsys):
        result = __main__.cmd_resolve(["--types-module", '{"$ref": "#/definitions/Widget"}'])

        assert result == 0
        assert "type:     Widget" in capsys.readouterr().out

    def test_enum(self, capsys):
        result = __main__.cmd_resolve(["{type: string, enum: [RED, GREEN]}"])

        assert result == 0
        out = capsys.readouterr().out
        assert "type:     enums.REDGREEN" in out
        assert "doc type: String" in out
        assert "enum:     export type REDGREEN = 'RED' | 'GREEN'" in out

    def test_from_file(self, tmp_path, capsys):
        schema = tmp_path / "schema.yaml"
        schema.write_text("type: object\nadditionalProperties:\n  type: integer\n")

        result = __main__.cmd_resolve(["--file", str(schema)])

        assert result == 0
        assert "type:     {[key: string]: Number}" in capsys.readouterr().out

    def test_strict_untyped_items(self, capsys):
        result = __main__.cmd_resolve(["--strict", '{"type": "array", "items": {}}'])

        assert result == 1
        assert "Unresolvable schema" in capsys.readouterr().err

    def test_invalid_yaml(self, capsys):
        result = __main__.cmd_resolve(["{type: [unclosed"])

        assert result == 1
        assert "cannot read schema" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        result = __main__.cmd_resolve(["--file", str(tmp_path / "missing.yaml")])

        assert result == 1
        assert "cannot read schema" in capsys.readouterr().err


class TestMain:
    def test_main_no_args(self, capsys):
        result = __main__.main([])
        assert result == 0
        captured = capsys.readouterr()
        assert "Available commands:" in captured.out

    @pytest.mark.parametrize("flag", ["-h", "--help"])
    def test_main_help(self, flag, capsys):
        result = __main__.main([flag])
        assert result == 0
        captured = capsys.readouterr()
        assert "Available commands:" in captured.out
        assert "generate" in captured.out

    def test_main_unknown_command(self, capsys):
        result = __main__.main(["unknown"])
        assert result == 1
        captured = capsys.readouterr()
        assert "Unknown command: unknown" in captured.out

    @patch("client_codegen.__main__.cmd_generate")
    def test_main_dispatches(self, mock_cmd):
        mock_cmd.return_value = 0
        with patch.dict(__main__.COMMANDS, {"generate": (mock_cmd, "Generate")}):
            result = __main__.main(["generate", "petstore.yaml", "--semicolon"])

        assert result == 0
        mock_cmd.assert_called_once_with(["petstore.yaml", "--semicolon"])

    @patch("sys.argv", ["client_codegen", "--help"])
    def test_main_reads_sys_argv(self, capsys):
        assert __main__.main() == 0
