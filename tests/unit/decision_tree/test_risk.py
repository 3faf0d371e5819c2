import math

import pytest

from forge_validators.decision_tree import (
    DecisionTreeError,
    NodeKind,
    RiskOutcome,
    RolledNode,
    TreeNode,
    risk_profile,
    risk_profile_table,
    rollback,
    summarize_risk_profile,
)


def test_investment_risk_profile(investment_tree):
    rolled = rollback(investment_tree)

    invest = risk_profile(rolled.child("Invest"))
    dont = risk_profile(rolled.child("Don't Invest"))

    assert invest == (
        RiskOutcome("Success", 0.7, 300_000.0),
        RiskOutcome("Failure", 0.3, 50_000.0),
    )
    assert dont == (RiskOutcome("Don't Invest", 1.0, 0.0),)


def test_nested_profile_multiplies_chance_and_follows_decisions(staged_tree):
    outcomes = risk_profile(rollback(staged_tree).child("Pilot"))

    assert [o.name for o in outcomes] == ["Boom", "Flat", "Pilot Fails"]
    assert [o.probability for o in outcomes] == pytest.approx([0.3, 0.3, 0.4])
    assert "Sell Rights" not in {o.name for o in outcomes}


@pytest.mark.parametrize("alternative", ["Pilot", "Skip"])
def test_profile_probabilities_sum_to_one(staged_tree, alternative):
    outcomes = risk_profile(rollback(staged_tree).child(alternative))
    assert math.fsum(o.probability for o in outcomes) == pytest.approx(1.0)


def test_uniform_fill_in_flows_into_profile():
    tree = TreeNode.decision(
        "Root",
        [
            TreeNode.chance(
                "Gamble",
                [
                    TreeNode.terminal("A", 1.0),
                    TreeNode.terminal("B", 2.0),
                    TreeNode.terminal("C", 3.0),
                    TreeNode.terminal("D", 4.0),
                ],
            ),
            TreeNode.terminal("Pass", 0.0),
        ],
    )
    outcomes = risk_profile(rollback(tree).child("Gamble"))

    assert [o.probability for o in outcomes] == [0.25] * 4


def test_profile_requires_rolled_back_decisions():
    node = RolledNode(
        name="Unresolved",
        kind=NodeKind.DECISION,
        emv=0.0,
        children=(RolledNode(name="Leaf", kind=NodeKind.TERMINAL, emv=1.0, payoff=1.0),),
    )
    with pytest.raises(DecisionTreeError, match="not been rolled back"):
        risk_profile(node)


def test_risk_profile_table_merges_equal_payoffs_and_accumulates():
    outcomes = [
        RiskOutcome("High", 0.2, 100.0),
        RiskOutcome("Low", 0.5, -10.0),
        RiskOutcome("AlsoHigh", 0.3, 100.0),
    ]
    table = risk_profile_table(outcomes)

    assert list(table.columns) == ["payoff", "probability", "cumulative_probability"]
    assert table["payoff"].tolist() == [-10.0, 100.0]
    assert table["probability"].tolist() == pytest.approx([0.5, 0.5])
    assert table["cumulative_probability"].iloc[-1] == pytest.approx(1.0)


def test_risk_profile_table_empty():
    assert risk_profile_table([]).empty


def test_summary_statistics(staged_tree):
    outcomes = risk_profile(rollback(staged_tree).child("Pilot"))
    summary = summarize_risk_profile(outcomes)

    # Payoffs before costs: 0.3*500 + 0.3*100 + 0.4*(-40)
    assert summary.expected_value == pytest.approx(164.0)
    assert summary.min_payoff == -40.0
    assert summary.max_payoff == 500.0
    assert summary.probability_of_loss == pytest.approx(0.4)
    variance = 0.3 * 336**2 + 0.3 * 64**2 + 0.4 * 204**2
    assert summary.std_dev == pytest.approx(math.sqrt(variance))


def test_summary_requires_outcomes():
    with pytest.raises(ValueError, match="must not be empty"):
        summarize_risk_profile([])
