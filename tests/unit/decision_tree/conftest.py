import pytest

from forge_validators.decision_tree import TreeNode


@pytest.fixture
def investment_tree() -> TreeNode:
    return TreeNode.decision(
        "Investment Decision",
        [
            TreeNode.chance(
                "Invest",
                [
                    TreeNode.terminal("Success", 300_000, probability=0.7),
                    TreeNode.terminal("Failure", 50_000, probability=0.3),
                ],
                cost=100_000,
            ),
            TreeNode.terminal("Don't Invest", 0),
        ],
    )


@pytest.fixture
def staged_tree() -> TreeNode:
    """Two-stage launch: a pilot whose outcome gates a second decision."""
    return TreeNode.decision(
        "Launch",
        [
            TreeNode.chance(
                "Pilot",
                [
                    TreeNode.decision(
                        "Pilot Succeeds",
                        [
                            TreeNode.chance(
                                "Scale Up",
                                [
                                    TreeNode.terminal("Boom", 500.0, probability=0.5),
                                    TreeNode.terminal("Flat", 100.0, probability=0.5),
                                ],
                                cost=50.0,
                            ),
                            TreeNode.terminal("Sell Rights", 200.0),
                        ],
                        probability=0.6,
                    ),
                    TreeNode.terminal("Pilot Fails", -40.0, probability=0.4),
                ],
                cost=20.0,
            ),
            TreeNode.terminal("Skip", 0.0),
        ],
    )
