from pathlib import Path

import pytest

from client_codegen.api_codegen.options import (
    DEFAULT_SP,
    ClientOptions,
    Formatting,
    apply_format_options,
    format_doc_description,
    load_options,
    options_from_mapping,
)
from client_codegen.shared.errors import OptionsError


class TestClientOptions:
    def test_defaults(self):
        options = ClientOptions()
        assert options.language == "ts"
        assert options.out_dir == Path("generated")
        assert options.is_typescript
        assert not options.semicolon

    def test_out_dir_coerced(self):
        assert ClientOptions(out_dir="src/api").out_dir == Path("src/api")

    def test_indent_coerced(self):
        assert ClientOptions(indent=4).indent == "4"

    @pytest.mark.parametrize(
        "kwargs,option",
        [
            ({"language": "py"}, "language"),
            ({"indent": "3"}, "indent"),
            ({"timeout": -1}, "timeout"),
            ({"schemes": "https"}, "schemes"),
        ],
    )
    def test_invalid(self, kwargs, option):
        with pytest.raises(OptionsError) as exc_info:
            ClientOptions(**kwargs)
        assert exc_info.value.option == option


class TestOptionsFromMapping:
    def test_camel_case_keys(self):
        options = options_from_mapping({
            "outDir": "out",
            "securityDefinitions": {"api_key": {"type": "apiKey"}},
            "getAuthorization": "() => null",
        })
        assert options.out_dir == Path("out")
        assert options.security_definitions == {"api_key": {"type": "apiKey"}}
        assert options.get_authorization == "() => null"

    def test_overrides_win_and_none_is_ignored(self):
        options = options_from_mapping({"language": "js", "host": "a"}, language="ts", host=None)
        assert options.language == "ts"
        assert options.host == "a"

    def test_unknown_key(self):
        with pytest.raises(OptionsError):
            options_from_mapping({"redux": True})

    def test_load_options(self, tmp_path):
        config = tmp_path / "client.yaml"
        config.write_text("src: petstore.yaml\nlanguage: js\nindent: 4\nsemicolon: true\n")

        options = load_options(config, out_dir=tmp_path / "out")

        assert options.src == "petstore.yaml"
        assert options.language == "js"
        assert options.indent == "4"
        assert options.semicolon is True
        assert options.out_dir == tmp_path / "out"


class TestApplyFormatOptions:
    @pytest.mark.parametrize(
        "indent,sp",
        [
            ("tab", "\t"),
            ("\t", "\t"),
            ("4", "    "),
            ("2", "  "),
            ("spaces", DEFAULT_SP),
        ],
    )
    def test_indent(self, indent, sp):
        assert apply_format_options(ClientOptions(indent=indent)).sp == sp

    def test_semicolon(self):
        assert apply_format_options(ClientOptions(semicolon=True)).st == ";"
        assert apply_format_options(ClientOptions()).st == ""

    def test_options_are_not_shared(self):
        tabbed = apply_format_options(ClientOptions(indent="tab"))
        default = apply_format_options(ClientOptions())
        assert tabbed.sp != default.sp


class TestFormatDocDescription:
    def test_multiline(self):
        fmt = Formatting(sp="  ")
        assert format_doc_description("first\nsecond\n", fmt) == "first\n *   second"

    def test_empty(self):
        assert format_doc_description(None, Formatting()) == ""
