"""
Command-line entry point for Gridfall host tasks and simulated games.
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

from gridfall.config import load_config
from gridfall.host import TaskRunner, TASKS
from gridfall.simulation import GridfallSimulation, SimulationReport

WEI_PER_ETH = 10 ** 18


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def print_report(report: SimulationReport) -> None:
    """Print a formatted game summary."""
    state = report.state
    print("\n" + "=" * 60)
    print("GAME OVER")
    print("=" * 60)
    print(f"Game ID: {report.game_id}")
    print(f"Rounds played: {report.rounds_played}")
    print(f"Actions: {len(state.action_history)}")
    print(f"Rejected actions: {len(report.rejected_actions)}")

    print(f"\nWinners ({len(report.winners)}):")
    for winner in report.winners:
        print(f"  • {winner} ({report.roles[winner].value}, {state.moves_of(winner)} moves)")

    eliminated = [p for p in report.roles if state.is_eliminated(p)]
    if eliminated:
        print(f"\nEliminated ({len(eliminated)}):")
        for player in eliminated:
            refund = report.refunds.get(player)
            note = f" - exited, refunded {refund / WEI_PER_ETH:.4f} ETH" if refund else ""
            print(f"  • {player} ({report.roles[player].value}){note}")

    distribution = report.distribution
    print(f"\nPrize pool: {distribution.prize_pool / WEI_PER_ETH:.4f} ETH")
    print(f"Protocol fee: {distribution.protocol_fee / WEI_PER_ETH:.4f} ETH")
    print(f"Prize per winner: {distribution.prize_per_winner / WEI_PER_ETH:.4f} ETH")


def main() -> int:
    """Entry point for running host tasks or a simulated game."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Run Gridfall confidential host tasks or a simulated game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py roles                                   # Read $IEXEC_IN/input.json, write to $IEXEC_OUT
  python main.py action --input-dir in --output-dir out  # Resolve one scan or exit
  python main.py winners --config configs/local.yaml     # Calculate winners
  python main.py simulate --seed 42                      # Play a full game with dummy players
        """
    )
    parser.add_argument(
        "command",
        choices=sorted(TASKS) + ["simulate"],
        help="Host task to run, or 'simulate' for a full dummy game"
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file (default: use default config)"
    )
    parser.add_argument("--input-dir", "-i", type=str, default=None, help="Directory holding input.json")
    parser.add_argument("--output-dir", "-o", type=str, default=None, help="Directory for result files")
    parser.add_argument(
        "--seed",
        "-s",
        type=int,
        default=None,
        help="Random seed for reproducible dummy players (simulate only)"
    )
    parser.add_argument(
        "--run-name",
        "-r",
        type=str,
        default=None,
        help="Custom name for the recorded run (simulate only)"
    )

    args = parser.parse_args()

    config = load_config(args.config)
    configure_logging(config.log_level)

    if args.command != "simulate":
        return TaskRunner(config).execute(args.command, args.input_dir, args.output_dir)

    if args.seed is not None:
        config.random_seed = args.seed

    simulation = GridfallSimulation(config=config, run_name=args.run_name)
    report = simulation.run()
    print_report(report)

    if simulation.run_recorder:
        print(f"\nGame events saved to: {simulation.run_recorder.get_run_path()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
