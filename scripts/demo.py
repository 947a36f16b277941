#!/usr/bin/env python3
"""
Demo script for the match predictor.

This script:
- Fills the prediction form from command-line arguments
- Submits it to a running prediction service
- Prints the rendered result
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.predictor import (  # noqa: E402
    TEAMS,
    HttpPredictionClient,
    PredictionFormController,
    PredictorError,
    ValidationError,
    VenueCategory,
)
from src.utils.logging import setup_logging  # noqa: E402


class DemoRunner:
    """Drive the prediction form against a live service."""

    def __init__(self, url: str | None = None, timeout: float | None = None):
        self.client = HttpPredictionClient(url=url, timeout_seconds=timeout)
        self.controller = PredictionFormController(
            self.client,
            request_timeout_seconds=timeout,
        )

    def print_header(self, title: str) -> None:
        print()
        print("=" * 60)
        print(f" {title}")
        print("=" * 60)

    def print_form(self) -> None:
        view = self.controller.form_view()
        selection = self.controller.selection
        print(f"  Team 1:      {selection.team1 or '-'}")
        print(f"  Team 2:      {selection.team2 or '-'}  (options: {', '.join(view.team2_options)})")
        if view.show_toss:
            print(f"  Toss winner: {selection.toss_winner or '-'}  (options: {', '.join(view.toss_options)})")
        print(f"  Venue type:  {selection.venue_category.value}")
        print(f"  Venue:       {selection.venue or '-'}")

    def print_result(self) -> None:
        view = self.controller.result_view()
        if view is None:
            print("  No result")
            return
        if view.is_error:
            print(f"  {view.error}")
            return

        filled = int(round(view.fill_width / 100 * 40))
        print(f"  Predicted Winner: {view.winner}")
        print(f"  [{'#' * filled}{'.' * (40 - filled)}] {view.label}")

    async def run(
        self,
        team1: str,
        team2: str,
        toss_winner: str,
        venue_category: str,
        venue: str,
    ) -> int:
        try:
            self.controller.set_team1(team1)
            self.controller.set_team2(team2)
            self.controller.set_toss_winner(toss_winner)
            self.controller.set_venue_category(venue_category)
            self.controller.set_venue(venue)
        except PredictorError as e:
            print(f"  Invalid selection: {e}")
            return 2

        self.print_header("Match Predictor")
        self.print_form()

        self.print_header(self.controller.form_view().submit_label)
        try:
            async with self.client:
                await self.controller.submit()
        except ValidationError as e:
            print(f"  {e.user_message} (missing: {', '.join(e.missing_fields)})")
            return 2

        self.print_result()
        print()
        return 0 if self.controller.result and self.controller.result.is_success else 1


def main():
    """Main function."""
    parser = argparse.ArgumentParser(description="Run match predictor demo")
    parser.add_argument("--url", type=str, default=None, help="Prediction endpoint URL")
    parser.add_argument("--timeout", type=float, default=None, help="Request deadline in seconds")
    parser.add_argument("--team1", choices=TEAMS, required=True)
    parser.add_argument("--team2", choices=TEAMS, required=True)
    parser.add_argument("--toss-winner", required=True, help="Must be team1 or team2")
    parser.add_argument(
        "--venue-type",
        choices=[c.value for c in VenueCategory],
        default=VenueCategory.COUNTRIES.value,
    )
    parser.add_argument("--venue", required=True)
    parser.add_argument("--verbose", action="store_true", help="Log request and response bodies")
    args = parser.parse_args()

    if args.team1 == args.team2:
        parser.error("--team2 must differ from --team1")

    setup_logging(level="DEBUG" if args.verbose else None)
    demo = DemoRunner(url=args.url, timeout=args.timeout)
    sys.exit(
        asyncio.run(
            demo.run(
                team1=args.team1,
                team2=args.team2,
                toss_winner=args.toss_winner,
                venue_category=args.venue_type,
                venue=args.venue,
            )
        )
    )


if __name__ == "__main__":
    main()
