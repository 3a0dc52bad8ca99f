from typer.testing import CliRunner

from blackjack_env.cli import app

runner = CliRunner()


def test_train_prints_policy_and_agreement():
    result = runner.invoke(
        app,
        ["train", "--episodes", "500", "--seed", "3", "--eval-episodes", "50", "--no-progress"],
    )
    assert result.exit_code == 0, result.output
    assert "Policy (S for Stick, H for Hit):" in result.output
    assert "Agreement with optimal policy:" in result.output
    assert "Mean greedy return over 50 episodes" in result.output


def test_reference_command():
    result = runner.invoke(app, ["reference"])
    assert result.exit_code == 0
    assert "Player Sum 20   S S S S S S S S S S   S S S S S S S S S S" in result.output
