"""Tests for AnalyzeTool."""

import pytest

from conftest import UsageErrorRaised, cli_context, fake_expander

from dart_dev.dev_tool import DevToolExecutionContext, ExitCode, ExitEarly, RunProcess
from dart_dev.integrations.process import ProcessDeclaration
from dart_dev.tools.analyze_tool import AnalyzeTool, build_execution

LIB_AND_TEST = fake_expander({"lib": ["lib"], "test": ["test"], ".": ["."]})


def test_default_analyzes_project_root():
    assert AnalyzeTool().run() == RunProcess(ProcessDeclaration("dartanalyzer", ["."]))


def test_dart_analyze():
    tool = AnalyzeTool(use_dart_analyze=True)
    assert tool.run().process.argv == ["dart", "analyze", "."]


def test_args_order():
    context = cli_context(
        args={"analyzer_args": "--fatal-infos --fatal-warnings"},
        command_name="analyze",
        passthrough=("--no-hints",),
        verbose=True,
    )
    execution = build_execution(
        context,
        configured_analyzer_args=["--packages", ".packages"],
        include=["test", "lib"],
        expand=LIB_AND_TEST,
    )
    assert execution.process.argv == [
        "dartanalyzer",
        "--packages",
        ".packages",
        "--fatal-infos",
        "--fatal-warnings",
        "-v",
        "--no-hints",
        "lib",
        "test",
    ]


def test_dart_analyze_has_no_verbose_flag():
    context = DevToolExecutionContext(verbose=True)
    execution = build_execution(context, use_dart_analyze=True, expand=LIB_AND_TEST)
    assert "-v" not in execution.process.args


def test_positional_args_are_a_usage_error():
    context = cli_context(command_name="analyze", rest=("lib/a.dart",))
    with pytest.raises(UsageErrorRaised, match="--analyzer-args"):
        build_execution(context, expand=LIB_AND_TEST)


def test_no_inputs_is_a_config_error():
    execution = build_execution(
        DevToolExecutionContext(), include=["web"], expand=fake_expander({})
    )
    assert execution == ExitEarly(ExitCode.CONFIG)
