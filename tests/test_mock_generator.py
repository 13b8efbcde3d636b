# /tests/test_mock_generator.py

import pytest

from app.services.mock_generator import generate_mock_code, resolve_extension


def test_button_prompt_with_react_jsx_yields_button_component():
    """
    GIVEN: the "Create a button component" example in React/JSX with React.
    WHEN:  the mock generator runs.
    THEN:  a single Button.jsx file and a non-empty explanation come back.
    """
    result = generate_mock_code("Create a button component", "React/JSX", "React")

    assert len(result.files) == 1
    assert result.files[0].filename == "Button.jsx"
    assert result.files[0].language == "jsx"
    assert "<button" in result.files[0].content
    assert result.explanation


@pytest.mark.parametrize("language, framework, expected", [
    ("JavaScript", None, "Button.js"),
    ("JavaScript", "React", "Button.jsx"),
    ("TypeScript", None, "Button.ts"),
    ("TypeScript", "Next.js", "Button.tsx"),
    ("Node.js", None, "Button.js"),
])
def test_button_filename_follows_language_and_framework(language, framework, expected):
    result = generate_mock_code("Make a BUTTON that submits the form", language, framework)
    assert result.files[0].filename == expected


def test_button_keyword_is_ignored_outside_javascript_family():
    result = generate_mock_code("Create a button component", "Python")

    assert result.files[0].filename == "main.py"
    assert "def generated_function" in result.files[0].content


def test_button_must_be_a_whole_word():
    result = generate_mock_code("Add a buttonhole stitch counter", "JavaScript")
    assert result.files[0].filename == "main.js"


@pytest.mark.parametrize("language, expected_filename, expected_language", [
    ("Python", "main.py", "python"),
    ("Java", "Main.java", "java"),
    ("HTML/CSS", "index.html", "html"),
    ("PHP", "main.php", "php"),
    ("Go", "main.go", "go"),
    ("COBOL", "main.txt", "plaintext"),
])
def test_generic_placeholder_per_language(language, expected_filename, expected_language):
    result = generate_mock_code("Sort a list of numbers", language)

    assert result.files[0].filename == expected_filename
    assert result.files[0].language == expected_language
    assert "Sort a list of numbers" in result.files[0].content
    assert language in result.explanation


def test_output_is_deterministic():
    first = generate_mock_code("Write a REST endpoint", "Node.js", "Express.js")
    second = generate_mock_code("Write a REST endpoint", "Node.js", "Express.js")
    assert first == second


def test_prompt_cannot_break_out_of_comment():
    result = generate_mock_code("evil */ code\nsecond line", "CSS")

    content = result.files[0].content
    assert content.startswith("/* evil * / code second line */")
    assert content.count("*/") == 1


def test_resolve_extension_is_case_insensitive():
    assert resolve_extension("  react/JSX ") == ("jsx", "jsx")
    assert resolve_extension("PYTHON") == ("py", "python")
    assert resolve_extension("javascript", "REACT") == ("jsx", "jsx")
