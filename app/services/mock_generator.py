# /app/services/mock_generator.py

"""
Deterministic stand-in for the code-generation provider.

Used whenever the real provider cannot produce a usable answer (no API key,
timeout, API error, malformed output). The output depends only on the request,
so the same request always yields the same files.
"""

import re
from typing import Optional, Tuple

from ..models.generation_model import CodeGenerationResult, GeneratedFile

SUMMARY_TOKEN = "__SUMMARY__"

# language name (lower-cased) -> (file extension, highlight language)
LANGUAGE_EXTENSIONS = {
    "javascript": ("js", "javascript"),
    "js": ("js", "javascript"),
    "node.js": ("js", "javascript"),
    "nodejs": ("js", "javascript"),
    "typescript": ("ts", "typescript"),
    "ts": ("ts", "typescript"),
    "react/jsx": ("jsx", "jsx"),
    "react": ("jsx", "jsx"),
    "jsx": ("jsx", "jsx"),
    "tsx": ("tsx", "tsx"),
    "python": ("py", "python"),
    "html/css": ("html", "html"),
    "html": ("html", "html"),
    "css": ("css", "css"),
    "php": ("php", "php"),
    "java": ("java", "java"),
    "go": ("go", "go"),
    "golang": ("go", "go"),
    "ruby": ("rb", "ruby"),
    "c#": ("cs", "csharp"),
    "csharp": ("cs", "csharp"),
    "c++": ("cpp", "cpp"),
    "cpp": ("cpp", "cpp"),
    "rust": ("rs", "rust"),
}
DEFAULT_EXTENSION = ("txt", "plaintext")

REACT_FRAMEWORKS = {"react", "next.js", "nextjs"}
BUTTON_EXTENSIONS = {"js", "jsx", "ts", "tsx"}
BUTTON_PATTERN = re.compile(r"\bbuttons?\b", re.IGNORECASE)


def resolve_extension(language: str, framework: Optional[str] = None) -> Tuple[str, str]:
    """Returns `(extension, highlight_language)` for the requested language and framework."""
    extension, highlight = LANGUAGE_EXTENSIONS.get(language.strip().lower(), DEFAULT_EXTENSION)
    if framework and framework.strip().lower() in REACT_FRAMEWORKS:
        if extension == "js":
            return "jsx", "jsx"
        if extension == "ts":
            return "tsx", "tsx"
    return extension, highlight


def _comment_safe(prompt: str) -> str:
    # One line, and nothing that could close a block comment early.
    summary = " ".join(prompt.split())
    return summary.replace("*/", "* /").replace("-->", "- ->")


# --- Canned Button Components ---

_BUTTON_TEMPLATES = {
    "jsx": """import React from "react";

// __SUMMARY__
export default function Button({ children = "Click me", onClick, disabled = false, variant = "primary" }) {
  const className = `btn btn-${variant}`;

  return (
    <button type="button" className={className} onClick={onClick} disabled={disabled}>
      {children}
    </button>
  );
}
""",
    "tsx": """import React from "react";

// __SUMMARY__
type ButtonProps = {
  children?: React.ReactNode;
  onClick?: () => void;
  disabled?: boolean;
  variant?: "primary" | "secondary";
};

export default function Button({ children = "Click me", onClick, disabled = false, variant = "primary" }: ButtonProps) {
  return (
    <button type="button" className={`btn btn-${variant}`} onClick={onClick} disabled={disabled}>
      {children}
    </button>
  );
}
""",
    "js": """// __SUMMARY__
export function createButton(label = "Click me", onClick = () => {}) {
  const button = document.createElement("button");
  button.type = "button";
  button.className = "btn btn-primary";
  button.textContent = label;
  button.addEventListener("click", onClick);
  return button;
}
""",
    "ts": """// __SUMMARY__
export function createButton(label: string = "Click me", onClick: () => void = () => {}): HTMLButtonElement {
  const button = document.createElement("button");
  button.type = "button";
  button.className = "btn btn-primary";
  button.textContent = label;
  button.addEventListener("click", onClick);
  return button;
}
""",
}


# --- Generic Placeholders ---

_PLACEHOLDER_TEMPLATES = {
    "js": """// __SUMMARY__
function generatedFunction(input) {
  // TODO: implement
  return input;
}

module.exports = { generatedFunction };
""",
    "jsx": """import React from "react";

// __SUMMARY__
export default function GeneratedComponent() {
  return <div>Generated component placeholder</div>;
}
""",
    "ts": """// __SUMMARY__
export function generatedFunction<T>(input: T): T {
  // TODO: implement
  return input;
}
""",
    "tsx": """import React from "react";

// __SUMMARY__
export default function GeneratedComponent(): JSX.Element {
  return <div>Generated component placeholder</div>;
}
""",
    "py": '''# __SUMMARY__
def generated_function(value):
    """Placeholder implementation."""
    # TODO: implement
    return value


if __name__ == "__main__":
    print(generated_function("Hello, world!"))
''',
    "html": """<!DOCTYPE html>
<!-- __SUMMARY__ -->
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Generated Page</title>
  <style>
    body { font-family: sans-serif; margin: 2rem; }
  </style>
</head>
<body>
  <h1>Generated page placeholder</h1>
</body>
</html>
""",
    "css": """/* __SUMMARY__ */
.generated {
  display: block;
}
""",
    "php": """<?php
// __SUMMARY__
function generatedFunction($input)
{
    // TODO: implement
    return $input;
}
""",
    "java": """// __SUMMARY__
public class Main {
    public static String generatedFunction(String input) {
        // TODO: implement
        return input;
    }

    public static void main(String[] args) {
        System.out.println(generatedFunction("Hello, world!"));
    }
}
""",
    "go": """// __SUMMARY__
package main

import "fmt"

func generatedFunction(input string) string {
\t// TODO: implement
\treturn input
}

func main() {
\tfmt.Println(generatedFunction("Hello, world!"))
}
""",
    "rb": """# __SUMMARY__
def generated_function(input)
  # TODO: implement
  input
end
""",
    "cs": """// __SUMMARY__
public static class Generated
{
    public static string GeneratedFunction(string input)
    {
        // TODO: implement
        return input;
    }
}
""",
    "cpp": """// __SUMMARY__
#include <iostream>
#include <string>

std::string generatedFunction(const std::string& input) {
    // TODO: implement
    return input;
}

int main() {
    std::cout << generatedFunction("Hello, world!") << std::endl;
    return 0;
}
""",
    "rs": """// __SUMMARY__
fn generated_function(input: &str) -> String {
    // TODO: implement
    input.to_string()
}

fn main() {
    println!("{}", generated_function("Hello, world!"));
}
""",
    "txt": """__SUMMARY__

Placeholder output: no template is available for this language.
""",
}

_PLACEHOLDER_FILENAMES = {
    "java": "Main.java",
    "html": "index.html",
    "css": "styles.css",
}


def _describe_target(language: str, framework: Optional[str]) -> str:
    return f"{language} ({framework})" if framework else language


def generate_mock_code(prompt: str, language: str, framework: Optional[str] = None) -> CodeGenerationResult:
    """Builds the fallback `{files, explanation}` result for a request."""
    extension, highlight = resolve_extension(language, framework)
    summary = _comment_safe(prompt)
    target = _describe_target(language, framework)

    if extension in BUTTON_EXTENSIONS and BUTTON_PATTERN.search(prompt):
        content = _BUTTON_TEMPLATES[extension].replace(SUMMARY_TOKEN, summary)
        generated_file = GeneratedFile(filename=f"Button.{extension}", content=content, language=highlight)
        explanation = (
            f"A reusable button component in {target}. It accepts a label, a click handler "
            "and basic styling options. This is placeholder output generated locally because "
            "the AI code generation service was unavailable."
        )
    else:
        content = _PLACEHOLDER_TEMPLATES[extension].replace(SUMMARY_TOKEN, summary)
        filename = _PLACEHOLDER_FILENAMES.get(extension, f"main.{extension}")
        generated_file = GeneratedFile(filename=filename, content=content, language=highlight)
        explanation = (
            f"A placeholder {target} starting point for your request. This output was generated "
            "locally because the AI code generation service was unavailable; try again later "
            "for a complete implementation."
        )

    return CodeGenerationResult(files=[generated_file], explanation=explanation)
