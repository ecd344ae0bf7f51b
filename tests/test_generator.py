"""Tests for protgen.core.generator module."""

from protgen.core.generator import (
    GeneratorConfig,
    format_signature,
    generate,
    join_names,
    render,
)
from protgen.core.parser import FunctionPrototype, parse_source


ADD_OUTPUT = """\
// Prototypes
#define FPL__FUNC_add(name) int name(int a, int b)
typedef FPL__FUNC_add(fpl__func_add);

// Declarations
fpl__func_add *add;

// Load
LOAD(h, lib, p.add, fpl__func_add, "add");
"""


class TestJoinNames:
    """Tests for join_names()."""

    def test_plain_tokens(self):
        assert join_names(["unsigned", "long", "int"]) == "unsigned long int"

    def test_empty(self):
        assert join_names([]) == ""

    def test_no_space_around_pointer(self):
        assert join_names(["char", "*"]) == "char*"
        assert join_names(["const", "char", "*", "s"]) == "const char*s"

    def test_double_pointer(self):
        assert join_names(["char", "*", "*", "argv"]) == "char**argv"

    def test_leading_pointer(self):
        assert join_names(["*", "p"]) == "*p"


class TestFormatSignature:
    """Tests for format_signature()."""

    def test_space_before_name(self):
        """Test a single space between a plain return type and 'name'."""
        proto = parse_source("int add(int a, int b)")[0]
        assert format_signature(proto) == "int name(int a, int b)"

    def test_no_space_after_pointer_return(self):
        """Test that a return type ending in '*' is followed directly by 'name'."""
        proto = parse_source("void *alloc(size_t size)")[0]
        assert format_signature(proto) == "void*name(size_t size)"

    def test_empty_returns(self):
        """Test that no return type leaves no leading space."""
        proto = parse_source("add(int a)")[0]
        assert format_signature(proto) == "name(int a)"

    def test_empty_arguments(self):
        proto = parse_source("void reset()")[0]
        assert format_signature(proto) == "void name()"


class TestRender:
    """Tests for render()."""

    def test_render_exact_output(self, short_config: GeneratorConfig):
        """Test the complete output for a single prototype."""
        prototypes = parse_source("int add(int a, int b)")
        assert render(prototypes, short_config) == ADD_OUTPUT

    def test_render_accepts_mapping(self):
        """Test rendering with a plain option mapping."""
        config = {
            "Prefix": "FPL__FUNC_",
            "LoadMacro": "LOAD",
            "LoadLibHandle": "h",
            "LoadLibName": "lib",
            "LoadLibFieldPrefix": "p.",
        }
        assert render(parse_source("int add(int a, int b)"), config) == ADD_OUTPUT

    def test_render_empty_list(self, short_config: GeneratorConfig):
        """Test that no prototypes renders nothing, not even headers."""
        assert render([], short_config) == ""

    def test_render_multiple_keeps_order(self, short_config: GeneratorConfig):
        """Test that each section lists functions in input order."""
        output = render(parse_source("int a(int x) void *b()"), short_config)
        assert output == (
            "// Prototypes\n"
            "#define FPL__FUNC_a(name) int name(int x)\n"
            "typedef FPL__FUNC_a(fpl__func_a);\n"
            "#define FPL__FUNC_b(name) void*name()\n"
            "typedef FPL__FUNC_b(fpl__func_b);\n"
            "\n"
            "// Declarations\n"
            "fpl__func_a *a;\n"
            "fpl__func_b *b;\n"
            "\n"
            "// Load\n"
            'LOAD(h, lib, p.a, fpl__func_a, "a");\n'
            'LOAD(h, lib, p.b, fpl__func_b, "b");\n'
        )

    def test_render_empty_returns(self, short_config: GeneratorConfig):
        """Test the macro line when there is no return type."""
        output = render([FunctionPrototype(name="add", args=[["int", "a"]])], short_config)
        assert "#define FPL__FUNC_add(name) name(int a)\n" in output

    def test_render_empty_config(self):
        """Test that missing options render as empty strings."""
        output = render(parse_source("int f()"), {})
        assert "#define f(name) int name()\n" in output
        assert "typedef f(f);\n" in output
        assert "f *f;\n" in output
        assert '(, , f, f, "f");\n' in output

    def test_render_is_deterministic(self, short_config: GeneratorConfig):
        prototypes = parse_source("int a(int x) char *b(const char *s)")
        assert render(prototypes, short_config) == render(prototypes, short_config)

    def test_render_default_config(self):
        """Test the built-in Win32 defaults."""
        output = render(parse_source("HDC GetDC(HWND hWnd)"), GeneratorConfig.defaults())
        assert "#define FPL__WIN32_FUNC_GetDC(name) HDC name(HWND hWnd)\n" in output
        assert "typedef FPL__WIN32_FUNC_GetDC(fpl__win32_func_GetDC);\n" in output
        assert "fpl__win32_func_GetDC *GetDC;\n" in output
        assert (
            "FPL__WIN32_GET_FUNCTION_ADDRESS_RETURN(libraryHandle, libraryName, "
            'wapi->user.GetDC, fpl__win32_func_GetDC, "GetDC");\n'
        ) in output


class TestGenerate:
    """Tests for generate()."""

    def test_generate_success(self, short_config: GeneratorConfig):
        assert generate("int add(int a, int b)", short_config) == ADD_OUTPUT

    def test_generate_empty_source(self, short_config: GeneratorConfig):
        """Test that empty input is a no-op, not an error."""
        assert generate("", short_config) == ""
        assert generate("  \n\t ", short_config) == ""

    def test_generate_missing_name_is_error_line(self, short_config: GeneratorConfig):
        """Test that '(' without a name yields a single error line."""
        output = generate("(int a)", short_config)
        assert output.startswith("Error: ")
        assert len(output.splitlines()) == 1
        assert "Line 1, Column 1" in output

    def test_generate_trailing_separator_is_error_line(
        self, short_config: GeneratorConfig
    ):
        """Test that 'foo(a,)' fails instead of adding an empty argument."""
        output = generate("foo(a,)", short_config)
        assert output.startswith("Error: ")
        assert len(output.splitlines()) == 1
        assert "name(a, )" not in output

    def test_generate_error_replaces_all_output(self, short_config: GeneratorConfig):
        """Test that a later error discards earlier valid prototypes."""
        output = generate("int a(int x)\nint b(int y,)", short_config)
        assert output.startswith("Error: ")
        assert "// Prototypes" not in output

    def test_generate_only_unterminated(self, short_config: GeneratorConfig):
        """Test that an unclosed argument list produces no output."""
        assert generate("int a(int x", short_config) == ""


class TestGeneratorConfig:
    """Tests for GeneratorConfig dataclass."""

    def test_defaults_are_empty(self):
        config = GeneratorConfig()
        assert config.prefix == ""
        assert config.load_macro == ""
        assert config.load_lib_field_prefix == ""

    def test_from_mapping_ignores_unknown_keys(self):
        config = GeneratorConfig.from_mapping({"Prefix": "X_", "Other": "y"})
        assert config.prefix == "X_"
        assert config.load_macro == ""

    def test_mapping_round_trip(self):
        config = GeneratorConfig.defaults()
        assert GeneratorConfig.from_mapping(config.to_mapping()) == config

    def test_to_mapping_option_names(self):
        assert list(GeneratorConfig().to_mapping()) == [
            "Prefix",
            "LoadMacro",
            "LoadLibHandle",
            "LoadLibName",
            "LoadLibFieldPrefix",
        ]

    def test_merged(self):
        config = GeneratorConfig.defaults().merged({"Prefix": "MY_"})
        assert config.prefix == "MY_"
        assert config.load_macro == "FPL__WIN32_GET_FUNCTION_ADDRESS_RETURN"

    def test_type_prefix(self):
        assert GeneratorConfig(prefix="FPL__FUNC_").type_prefix == "fpl__func_"

    def test_validate_valid(self):
        assert GeneratorConfig.defaults().validate() == []
        assert GeneratorConfig().validate() == []

    def test_validate_invalid_prefix(self):
        errors = GeneratorConfig(prefix="1bad-").validate()
        assert len(errors) == 1
        assert "not a valid C identifier prefix" in errors[0]

    def test_validate_multiline_option(self):
        errors = GeneratorConfig(load_macro="A\nB").validate()
        assert errors == ["Option 'LoadMacro' must be a single line."]
