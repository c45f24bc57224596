from urllib.parse import parse_qs

import pytest
import responses

from animeapi.runoob import RunOOB

API = "https://www.runoob.com/try/compile2.php"
GO_CODE = """package main

	import "fmt"
	
	func main() {
	   fmt.Println("Hello, World!aaa")
	}"""


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


def test_run(rsps):
    rsps.add(responses.POST, API, json={"output": "Hello, World!aaa\n", "errors": "\n"})
    ro = RunOOB("token")
    assert ro.run(GO_CODE, "go", "") == "Hello, World!aaa\n"
    form = parse_qs(rsps.calls[0].request.body, keep_blank_values=True)
    assert form["language"] == ["6"]
    assert form["fileext"] == ["go"]
    assert form["token"] == ["token"]
    assert form["code"] == [GO_CODE]
    assert form["stdin"] == [""]


def test_run_alias_language(rsps):
    rsps.add(responses.POST, API, json={"output": "ok", "errors": ""})
    assert RunOOB("token").run("print(1)", "py", "in") == "ok"
    form = parse_qs(rsps.calls[0].request.body)
    assert form["language"] == ["15"]
    assert form["fileext"] == ["py3"]
    assert form["stdin"] == ["in"]


def test_run_unknown_language(rsps):
    with pytest.raises(ValueError, match="no such language"):
        RunOOB("token").run("x", "brainfuck", "")
    assert len(rsps.calls) == 0


def test_run_reports_compiler_errors(rsps):
    rsps.add(responses.POST, API, json={"output": "", "errors": "\nboom\n"})
    with pytest.raises(RuntimeError) as info:
        RunOOB("token").run("x", "go", "")
    assert str(info.value) == "boom"


def test_run_bad_status(rsps):
    rsps.add(responses.POST, API, status=500)
    with pytest.raises(RuntimeError, match="status code 500"):
        RunOOB("token").run("x", "go", "")