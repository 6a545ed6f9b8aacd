"""
Command line interface for the ParPass client.
"""

import argparse
import json
import sys
from dataclasses import asdict
from typing import Any
from zoneinfo import ZoneInfo

from tabulate import tabulate

from parpass.config.error_aggregator import get_error_aggregator
from parpass.config.error_aggregator import init_error_aggregator
from parpass.config.logging import setup_logging
from parpass.config.settings import ConfigurationManager
from parpass.exceptions import CredentialError
from parpass.exceptions import ParPassError
from parpass.models.member import Member
from parpass.services.course_service import CourseCatalog
from parpass.services.favorite_service import FavoriteToggler
from parpass.services.history_service import group_rounds_by_month
from parpass.services.history_service import summarize_history
from parpass.services.review_service import ReviewAggregator
from parpass.services.review_service import format_rating
from parpass.services.review_service import validate_rating
from parpass.services.stats_service import load_dashboard
from parpass.utils.cli_utils import CLIBuilder
from parpass.utils.cli_utils import CLIContext
from parpass.utils.cli_utils import CLIOptionFactory
from parpass.utils.cli_utils import CommandCategory
from parpass.utils.cli_utils import CommandRegistry
from parpass.utils.cli_utils import create_command_group
from parpass.utils.cli_utils import validate_arguments
from parpass.utils.logging_utils import get_logger
from parpass.utils.parsing import parse_timestamp


SAMPLE_CODE = 'PP100001'

def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))

def _report_failure(ctx: CLIContext, action: str, error: ParPassError) -> int:
    """Log a failed command and point the member somewhere useful."""
    ctx.logger.error(f"Failed to {action}: {error}")
    print(f"Could not {action}: {error.message}")
    if error.hint:
        print(error.hint)
    return 1

def _round_date(checked_in_at: str, tz: ZoneInfo) -> str:
    """Date of a round in the configured timezone, raw text if unparseable."""
    try:
        return parse_timestamp(checked_in_at, tz).strftime("%Y-%m-%d")
    except ValueError:
        return checked_in_at[:10]

def _require_member(ctx: CLIContext) -> Member | None:
    """Signed-in member, or None after telling the user how to sign in."""
    state = ctx.session.load()
    if state.member is None:
        print("Sign in required. Run 'parpass login <CODE>'.")
        return None
    return state.member

@create_command_group('session', 'Sign in and out')
class SessionCommands:
    """Session command implementations."""

    @staticmethod
    @CommandRegistry.register(
        name='login',
        help_text='Sign in with your ParPass code',
        category=CommandCategory.SESSION,
        options=[
            {
                'name': 'code',
                'help': 'ParPass code printed on your member card',
                'validator': lambda x: bool(x.strip())
            }
        ]
    )
    def login(ctx: CLIContext) -> int:
        try:
            state = ctx.session.sign_in(ctx.args.code)
        except CredentialError as e:
            return _report_failure(ctx, 'save your ParPass code', e)
        except ParPassError as e:
            ctx.logger.info(f"Sign in failed: {e}")
            print(f"Invalid ParPass code. Try {SAMPLE_CODE}")
            return 1

        assert state.member is not None and state.usage is not None
        print(f"Signed in as {state.member.full_name} ({state.member.tier.upper()} member)")
        print(f"{state.member.rounds_remaining(state.usage)} rounds remaining this month")
        return 0

    @staticmethod
    @CommandRegistry.register(
        name='logout',
        help_text='Sign out and forget the stored ParPass code',
        category=CommandCategory.SESSION
    )
    def logout(ctx: CLIContext) -> int:
        try:
            ctx.session.sign_out()
        except ParPassError as e:
            return _report_failure(ctx, 'sign out', e)
        print("Signed out")
        return 0

    @staticmethod
    @CommandRegistry.register(
        name='whoami',
        help_text='Show the signed-in member and remaining rounds',
        category=CommandCategory.SESSION,
        options=[CLIOptionFactory.create_format_option()]
    )
    def whoami(ctx: CLIContext) -> int:
        member = _require_member(ctx)
        if member is None:
            return 1
        usage = ctx.session.usage
        assert usage is not None

        if ctx.args.format == 'json':
            _print_json({
                'member': asdict(member),
                'usage': asdict(usage),
                'rounds_remaining': member.rounds_remaining(usage)
            })
            return 0

        print(f"\n{member.full_name}")
        print("=" * 60)
        print(tabulate([
            ["Health plan", member.health_plan_name],
            ["Tier", f"{member.tier.upper()} MEMBER"],
            ["Rounds remaining", member.rounds_remaining(usage)],
            ["Used this month", f"{usage.rounds_used} of {member.monthly_rounds}"],
        ], tablefmt="plain"))
        return 0

    @staticmethod
    @CommandRegistry.register(
        name='checkin',
        help_text='Check in for a round at a course',
        category=CommandCategory.SESSION,
        options=[
            CLIOptionFactory.create_course_argument(),
            CLIOptionFactory.create_positive_int_option('--holes', 18, 'Holes played')
        ]
    )
    def checkin(ctx: CLIContext) -> int:
        member = _require_member(ctx)
        if member is None:
            return 1
        try:
            ctx.session.check_in(ctx.args.course_id, ctx.args.holes)
        except ParPassError as e:
            return _report_failure(ctx, 'check in', e)

        print(f"Checked in for {ctx.args.holes} holes")
        if ctx.session.usage_stale:
            print("Could not refresh your remaining rounds. Run 'parpass whoami' later.")
        else:
            print(f"{ctx.session.rounds_remaining} rounds remaining this month")
        return 0

@create_command_group('courses', 'Browse network courses')
class CourseCommands:
    """Course command implementations."""

    @staticmethod
    @CommandRegistry.register(
        name='list',
        help_text='List courses in the network',
        category=CommandCategory.COURSES,
        options=[CLIOptionFactory.create_tier_option(), CLIOptionFactory.create_format_option()],
        parent_command='courses'
    )
    def list_courses(ctx: CLIContext) -> int:
        try:
            courses = CourseCatalog(ctx.api).list_courses(ctx.args.tier)
        except ParPassError as e:
            return _report_failure(ctx, 'list courses', e)

        if ctx.args.format == 'json':
            _print_json([asdict(course) for course in courses])
            return 0
        if not courses:
            print("No courses found")
            return 0

        table = [
            [course.id, course.name, course.location, course.holes, course.tier_required.upper(),
             format_rating(course.average_rating, course.review_count)]
            for course in courses
        ]
        print(tabulate(table, headers=["ID", "Course", "Location", "Holes", "Tier", "Rating"], tablefmt="psql"))
        return 0

    @staticmethod
    @CommandRegistry.register(
        name='show',
        help_text='Show one course',
        category=CommandCategory.COURSES,
        options=[CLIOptionFactory.create_course_argument(), CLIOptionFactory.create_format_option()],
        parent_command='courses'
    )
    def show_course(ctx: CLIContext) -> int:
        member = ctx.session.load().member
        try:
            detail = CourseCatalog(ctx.api).course_detail(ctx.args.course_id, member)
        except ParPassError as e:
            return _report_failure(ctx, 'load the course', e)

        course = detail.course
        if ctx.args.format == 'json':
            _print_json({**asdict(course), 'is_favorite': detail.is_favorite})
            return 0

        heart = " ♥" if detail.is_favorite else ""
        print(f"\n{course.name}{heart}")
        print("=" * 60)
        print(tabulate([
            ["Tier", course.tier_required.upper()],
            ["Location", course.location],
            ["Holes", course.holes],
            ["Phone", course.phone],
            ["Rating", format_rating(course.average_rating, course.review_count)],
        ], tablefmt="plain"))
        print("\nShow your ParPass code at the pro shop when you arrive.")
        return 0

    @staticmethod
    @CommandRegistry.register(
        name='recommend',
        help_text='Courses recommended for you',
        category=CommandCategory.COURSES,
        options=[CLIOptionFactory.create_format_option()],
        parent_command='courses'
    )
    def recommend(ctx: CLIContext) -> int:
        member = _require_member(ctx)
        if member is None:
            return 1
        try:
            recommended = CourseCatalog(ctx.api, ctx.recommender).recommendations(member.id)
        except ParPassError as e:
            return _report_failure(ctx, 'load recommendations', e)

        if ctx.args.format == 'json':
            _print_json([asdict(course) for course in recommended])
            return 0
        if not recommended:
            print("No recommendations yet. Play a few rounds first.")
            return 0

        table = [[course.id, course.name, course.location, course.reason] for course in recommended]
        print(tabulate(table, headers=["ID", "Course", "Location", "Why"], tablefmt="psql"))
        return 0

@create_command_group('favorites', 'Manage favorite courses')
class FavoriteCommands:
    """Favorite command implementations."""

    @staticmethod
    @CommandRegistry.register(
        name='list',
        help_text='List your favorite courses',
        category=CommandCategory.FAVORITES,
        options=[CLIOptionFactory.create_format_option()],
        parent_command='favorites'
    )
    def list_favorites(ctx: CLIContext) -> int:
        member = _require_member(ctx)
        if member is None:
            return 1
        try:
            favorites = CourseCatalog(ctx.api).favorites(member)
        except ParPassError as e:
            return _report_failure(ctx, 'load favorites', e)

        if ctx.args.format == 'json':
            _print_json([asdict(course) for course in favorites])
            return 0
        if not favorites:
            print("No favorites yet. Browse with 'parpass courses list'.")
            return 0

        table = [[course.id, course.name, course.location, course.holes, course.phone] for course in favorites]
        print(tabulate(table, headers=["ID", "Course", "Location", "Holes", "Phone"], tablefmt="psql"))
        return 0

    @staticmethod
    @CommandRegistry.register(
        name='toggle',
        help_text='Add a course to your favorites, or remove it',
        category=CommandCategory.FAVORITES,
        options=[CLIOptionFactory.create_course_argument()],
        parent_command='favorites'
    )
    def toggle_favorite(ctx: CLIContext) -> int:
        member = _require_member(ctx)
        if member is None:
            return 1
        toggler = FavoriteToggler(ctx.api, member)
        try:
            toggler.load()
        except ParPassError as e:
            return _report_failure(ctx, 'load favorites', e)

        was_favorite = toggler.is_favorite(ctx.args.course_id)
        now_favorite = toggler.toggle(ctx.args.course_id)
        if now_favorite == was_favorite:
            print("Favorites unchanged")
            return 1
        print("Added to favorites" if now_favorite else "Removed from favorites")
        return 0

@create_command_group('history', 'Round history')
class HistoryCommands:
    """History command implementations."""

    @staticmethod
    @CommandRegistry.register(
        name='history',
        help_text='Show your rounds, grouped by month',
        category=CommandCategory.HISTORY,
        options=[CLIOptionFactory.create_format_option()]
    )
    def history(ctx: CLIContext) -> int:
        member = _require_member(ctx)
        if member is None:
            return 1
        try:
            rounds = ctx.api.get_member_history(member.id)
        except ParPassError as e:
            return _report_failure(ctx, 'load history', e)

        tz = ZoneInfo(ctx.config.timezone)
        groups = group_rounds_by_month(rounds, tz)
        summary = summarize_history(rounds)

        if ctx.args.format == 'json':
            _print_json({
                'summary': asdict(summary),
                'groups': [asdict(group) for group in groups]
            })
            return 0
        if not rounds:
            print("No rounds yet. Find a course with 'parpass courses list'.")
            return 0

        print(f"\nTotal rounds: {summary.total_rounds}   Courses played: {summary.courses_played}")
        for group in groups:
            print(f"\n{group.label}")
            print("-" * 60)
            table = [
                [_round_date(played.checked_in_at, tz), played.course_name, f"{played.city}, {played.state}",
                 played.holes_played, played.tier_required.upper()]
                for played in group.rounds
            ]
            print(tabulate(table, tablefmt="plain"))
        return 0

@create_command_group('reviews', 'Read and write course reviews')
class ReviewCommands:
    """Review command implementations."""

    @staticmethod
    def _print_reviews(state: Any) -> None:
        print(f"\n{state.course.name}")
        print("=" * 60)
        rating = state.rating
        print(format_rating(rating.average_rating if rating else None, rating.review_count if rating else 0))
        if not state.reviews:
            print("\nNo reviews yet")
            return
        table = [
            [review.member_first_name, "★" * review.rating, review.comment or "", review.created_at[:10]]
            for review in state.reviews
        ]
        print(tabulate(table, headers=["Member", "Rating", "Comment", "Date"], tablefmt="psql"))

    @staticmethod
    @CommandRegistry.register(
        name='show',
        help_text='Show reviews of a course',
        category=CommandCategory.REVIEWS,
        options=[CLIOptionFactory.create_course_argument(), CLIOptionFactory.create_format_option()],
        parent_command='reviews'
    )
    def show_reviews(ctx: CLIContext) -> int:
        member = ctx.session.load().member
        try:
            state = ReviewAggregator(ctx.api, member).load(ctx.args.course_id)
        except ParPassError as e:
            return _report_failure(ctx, 'load reviews', e)

        if ctx.args.format == 'json':
            _print_json(asdict(state))
            return 0

        ReviewCommands._print_reviews(state)
        if member is not None:
            if state.form.existing is not None:
                print(f"\nYour review: {state.form.rating} stars. Submit again to update it.")
            elif state.can_review:
                print("\nYou played here. Rate it with 'parpass reviews submit'.")
            else:
                print("\nPlay a round here to leave a review.")
        return 0

    @staticmethod
    @CommandRegistry.register(
        name='submit',
        help_text='Rate a course you have played',
        category=CommandCategory.REVIEWS,
        options=[
            CLIOptionFactory.create_course_argument(),
            {
                'name': '--rating',
                'type': int,
                'help': 'Rating from 1 to 5'
            },
            {
                'name': '--comment',
                'help': 'Optional comment'
            }
        ],
        parent_command='reviews'
    )
    def submit_review(ctx: CLIContext) -> int:
        try:
            rating = validate_rating(ctx.args.rating)
        except ParPassError as e:
            print(e.message)
            return 1

        member = _require_member(ctx)
        if member is None:
            return 1
        aggregator = ReviewAggregator(ctx.api, member)
        try:
            state = aggregator.load(ctx.args.course_id)
            state = aggregator.submit(state, rating, ctx.args.comment)
        except ParPassError as e:
            return _report_failure(ctx, 'submit the review', e)

        print("Thanks for your review!")
        ReviewCommands._print_reviews(state)
        return 0

@create_command_group('dashboard', 'Operator dashboard')
class DashboardCommands:
    """Dashboard command implementations."""

    @staticmethod
    @CommandRegistry.register(
        name='dashboard',
        help_text='Network usage statistics',
        category=CommandCategory.STATS,
        options=[
            CLIOptionFactory.create_format_option(),
            CLIOptionFactory.create_positive_int_option('--top', 5, 'Popular courses to show')
        ]
    )
    def dashboard(ctx: CLIContext) -> int:
        try:
            snapshot = load_dashboard(ctx.api)
        except ParPassError as e:
            return _report_failure(ctx, 'load statistics', e)

        if ctx.args.format == 'json':
            _print_json(asdict(snapshot))
            return 0

        overview = snapshot.overview
        print("\nParPass Analytics")
        print("=" * 60)
        print(tabulate([
            ["Active members", overview.active_members],
            ["Courses", overview.total_courses],
            ["Total rounds", overview.total_rounds],
            ["This month", overview.rounds_this_month],
        ], tablefmt="plain"))

        print("\nPopular Courses")
        table = []
        for rank, bar in enumerate(snapshot.bars[:ctx.args.top], start=1):
            cells = round(bar.width_percent / 10)
            table.append([rank, bar.course.name, bar.course.city, "█" * cells, bar.course.total_rounds])
        print(tabulate(table, headers=["#", "Course", "City", "", "Rounds"], tablefmt="psql"))

        print(f"\nUsage by Tier ({snapshot.total_tier_rounds} rounds)")
        print(tabulate(
            [[arc.tier, arc.rounds, f"{arc.percent:.1f}%"] for arc in snapshot.arcs],
            headers=["Tier", "Rounds", "Share"],
            tablefmt="psql"
        ))

        print("\nTop Members")
        print(tabulate(
            [[m.full_name, m.health_plan, m.tier, m.total_rounds] for m in snapshot.top_members],
            headers=["Member", "Health Plan", "Tier", "Rounds"],
            tablefmt="psql"
        ))
        return 0

def create_parser() -> argparse.ArgumentParser:
    """Create argument parser from the registered commands."""
    builder = CLIBuilder(
        description='ParPass member and operator client'
    )

    for command in CommandRegistry.commands():
        builder.add_command(command)

    return builder.build()

def main(argv: list[str] | None = None, overrides: dict[str, Any] | None = None) -> int:
    """Main entry point for CLI.

    Args:
        argv: Arguments, defaults to sys.argv
        overrides: Prebuilt api, recommender or store used instead of the configured ones
    """
    logger = get_logger(__name__)
    try:
        parser = create_parser()
        args = parser.parse_args(argv)

        config = ConfigurationManager().load_config(args.config_dir)
        setup_logging(config, verbose=args.verbose, log_file=args.log_file)
        init_error_aggregator(config.logging.error_aggregation)

        ctx = CLIContext(
            args=args,
            logger=logger,
            config=config,
            parser=parser,
            overrides=overrides or {}
        )

        command = CommandRegistry.get_command(args.command, getattr(args, 'subcommand', None))
        if not command:
            logger.error(f"Unknown command: {args.command}")
            return 1

        errors = validate_arguments(args, command)
        if errors:
            for error in errors:
                logger.error(error)
                print(error, file=sys.stderr)
            return 1

        return command.handler(ctx)

    except ParPassError as e:
        logger.error(str(e))
        print(e.message, file=sys.stderr)
        if e.hint:
            print(e.hint, file=sys.stderr)
        return 1
    except Exception:
        logger.exception("Unhandled exception")
        return 1
    finally:
        aggregator = get_error_aggregator()
        if aggregator is not None:
            aggregator.shutdown()

if __name__ == '__main__':
    sys.exit(main())
