from __future__ import annotations

import pytest

from superclaude_lite.errors import UnknownStepReferenceError
from superclaude_lite.install_config import InstallConfig
from superclaude_lite.rules import MCP_RULES, STATIC_RULES, build_installation_graph, conditional_rules
from superclaude_lite.steps import STEP_NAMES


def positions(order):
    return {name: i for i, name in enumerate(order)}


def test_every_registered_step_is_scheduled():
    order = build_installation_graph(InstallConfig()).get_topological_order()
    assert sorted(order) == sorted(STEP_NAMES)
    assert order[0] == "CheckPrerequisites"
    assert order[-1] == "CleanupTempFiles"


@pytest.mark.parametrize("mcp", [False, True])
def test_order_respects_every_rule(mcp):
    config = InstallConfig(add_recommended_mcp=mcp)
    order = build_installation_graph(config).get_topological_order()
    pos = positions(order)
    for dependent, prerequisite in list(STATIC_RULES) + conditional_rules(config):
        assert pos[prerequisite] < pos[dependent]


def test_conditional_rules_are_gated_by_mcp_flag():
    assert conditional_rules(None) == []
    assert conditional_rules(InstallConfig()) == []
    assert conditional_rules(InstallConfig(add_recommended_mcp=True)) == list(MCP_RULES)


def test_enabling_mcp_only_adds_constraints():
    off = build_installation_graph(InstallConfig())
    on = build_installation_graph(InstallConfig(add_recommended_mcp=True))

    assert set(off.edges()) < set(on.edges())

    pos = positions(on.get_topological_order())
    for dependent, prerequisite in off.edges():
        assert pos[prerequisite] < pos[dependent]
    assert pos["MergeOrCreateMCPConfig"] < pos["ValidateInstallation"]


def test_validate_dependencies_follow_flag():
    off = build_installation_graph(InstallConfig())
    on = build_installation_graph(InstallConfig(add_recommended_mcp=True))
    assert "MergeOrCreateMCPConfig" not in off.get_dependencies("ValidateInstallation")
    assert "MergeOrCreateMCPConfig" in on.get_dependencies("ValidateInstallation")
    assert "MergeOrCreateMCPConfig" in on.get_dependencies("CleanupTempFiles")


def test_registry_mismatch_is_reported():
    known = [n for n in STEP_NAMES if n != "CreateCommandSymlink"]
    with pytest.raises(UnknownStepReferenceError) as exc:
        build_installation_graph(InstallConfig(), known_steps=known)
    assert exc.value.missing == ["CreateCommandSymlink"]
