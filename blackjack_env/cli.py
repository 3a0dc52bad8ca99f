"""
Command line demo: learn the blackjack hit/stick policy with Monte Carlo ES.
"""

import logging
from typing import Optional

import typer

from mces.rl.training import MonteCarloESTrainer, TrainingConfig, evaluate_policy

from .display import REFERENCE_POLICY, format_policy, policy_agreement
from .env import BlackjackEnvironment

app = typer.Typer(
    name="mces-blackjack",
    help="Monte Carlo Exploring Starts on infinite-deck blackjack",
)


@app.command()
def train(
    episodes: int = typer.Option(1_000_000, help="Number of training episodes"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
    eval_episodes: int = typer.Option(100_000, help="Greedy evaluation episodes"),
    progress: bool = typer.Option(True, help="Show a progress bar"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log periodic training statistics"),
) -> None:
    """Train a policy and print it next to its agreement with the optimum."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    env = BlackjackEnvironment()
    config = TrainingConfig(episodes=episodes, log_every=max(episodes // 10, 1), progress=progress)
    result = MonteCarloESTrainer(env, config, seed=seed).train()

    typer.echo(format_policy(result.policy))
    typer.echo(f"\nAgreement with optimal policy: {policy_agreement(result.policy):.1%}")
    if eval_episodes > 0:
        metrics = evaluate_policy(env, result.policy, eval_episodes, seed=seed)
        typer.echo(f"Mean greedy return over {eval_episodes} episodes: {metrics['mean_return']:+.4f}")


@app.command()
def reference() -> None:
    """Print the known optimal policy."""
    typer.echo(format_policy(REFERENCE_POLICY))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
