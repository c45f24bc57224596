"""Run code snippets on the runoob online compiler."""

from __future__ import annotations

import random
from urllib.parse import urlencode

import requests

API = "https://www.runoob.com/try/compile2.php"
TIMEOUT = 60

_USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) "
    "Version/17.1 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0",
)

_CPP = ("#include <iostream>\nusing namespace std;\n\nint main()\n{\n   cout << \"Hello World\";"
        "\n   return 0;\n}")
_CSHARP = ("using System;\nnamespace HelloWorldApplication\n{\n   class HelloWorld\n   {\n"
           "      static void Main(string[] args)\n      {\n"
           "         Console.WriteLine(\"Hello World!\");\n      }\n   }\n}")
_RUST = "fn main() {\n    println!(\"Hello World!\");\n}"
_JS = "console.log(\"Hello World!\");"
_RUBY = "puts \"Hello World!\";"
_SHELL = "echo 'Hello World!'"
_PY3 = "print(\"Hello, World!\")"
_KOTLIN = "fun main(args : Array<String>){\n    println(\"Hello World!\")\n}"
_TS = "const hello : string = \"Hello World!\"\nconsole.log(hello)"
_SWIFT = "var myString = \"Hello, World!\"\nprint(myString)"

TEMPLATES = {
    "py2": "print 'Hello World!'",
    "ruby": _RUBY,
    "rb": _RUBY,
    "php": "<?php\n\techo 'Hello World!';\n?>",
    "javascript": _JS,
    "js": _JS,
    "node.js": _JS,
    "scala": ("object Main {\n  def main(args:Array[String])\n  {\n"
              "    println(\"Hello World!\")\n  }\n\t\t\n}"),
    "go": "package main\n\nimport \"fmt\"\n\nfunc main() {\n   fmt.Println(\"Hello, World!\")\n}",
    "c": "#include <stdio.h>\n\nint main()\n{\n   printf(\"Hello, World! \n\");\n   return 0;\n}",
    "c++": _CPP,
    "cpp": _CPP,
    "java": ("public class HelloWorld {\n    public static void main(String []args) {\n"
             "       System.out.println(\"Hello World!\");\n    }\n}"),
    "rust": _RUST,
    "rs": _RUST,
    "c#": _CSHARP,
    "cs": _CSHARP,
    "csharp": _CSHARP,
    "shell": _SHELL,
    "bash": _SHELL,
    "erlang": "% escript will ignore the first line\n\nmain(_) ->\n    io:format(\"Hello World!~n\").",
    "perl": "print \"Hello, World!\n\";",
    "python": _PY3,
    "py": _PY3,
    "swift": _SWIFT,
    "lua": _SWIFT,
    "pascal": "runcode Hello;\nbegin\n  writeln ('Hello, world!')\nend.",
    "kotlin": _KOTLIN,
    "kt": _KOTLIN,
    "r": "myString <- \"Hello, World!\"\nprint ( myString)",
    "vb": ("Module Module1\n\n    Sub Main()\n        Console.WriteLine(\"Hello World!\")\n"
           "    End Sub\n\nEnd Module"),
    "typescript": _TS,
    "ts": _TS,
}

LANG_TABLE = {
    "py2": ("0", "py"),
    "ruby": ("1", "rb"),
    "rb": ("1", "rb"),
    "php": ("3", "php"),
    "javascript": ("4", "js"),
    "js": ("4", "js"),
    "node.js": ("4", "js"),
    "scala": ("5", "scala"),
    "go": ("6", "go"),
    "c": ("7", "c"),
    "c++": ("7", "cpp"),
    "cpp": ("7", "cpp"),
    "java": ("8", "java"),
    "rust": ("9", "rs"),
    "rs": ("9", "rs"),
    "c#": ("10", "cs"),
    "cs": ("10", "cs"),
    "csharp": ("10", "cs"),
    "shell": ("10", "sh"),
    "bash": ("10", "sh"),
    "erlang": ("12", "erl"),
    "perl": ("14", "pl"),
    "python": ("15", "py3"),
    "py": ("15", "py3"),
    "swift": ("16", "swift"),
    "lua": ("17", "lua"),
    "pascal": ("18", "pas"),
    "kotlin": ("19", "kt"),
    "kt": ("19", "kt"),
    "r": ("80", "r"),
    "vb": ("84", "vb"),
    "typescript": ("1010", "ts"),
    "ts": ("1010", "ts"),
}


class RunOOB:
    """A client of the online compiler holding its access token."""

    def __init__(self, token):
        self.token = token

    def run(self, code, lang, stdin):
        """Run ``code`` written in ``lang`` with ``stdin``; return its output."""
        run_type = LANG_TABLE.get(lang)
        if run_type is None:
            raise ValueError("no such language")
        language, fileext = run_type
        form = {
            "code": code,
            "token": self.token,
            "stdin": stdin,
            "language": language,
            "fileext": fileext,
        }
        headers = {
            "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8",
            "Origin": "https://www.runoob.com",
            "Referer": "https://www.runoob.com/try/runcode.php?",
            "User-Agent": random.choice(_USER_AGENTS),
        }
        response = requests.post(API, data=urlencode(sorted(form.items())),
                                 headers=headers, timeout=TIMEOUT)
        if response.status_code != 200:
            raise RuntimeError(f"status code {response.status_code}")
        body = response.json()
        errors = str(body.get("errors") or "").strip("\n")
        if errors:
            raise RuntimeError(errors)
        return str(body.get("output") or "")