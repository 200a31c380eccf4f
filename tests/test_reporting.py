from typer.testing import CliRunner

from career_tracker.cli import app
from career_tracker.models import Category, SessionRecord
from career_tracker.reporting import SummaryPrinter, format_duration


def _seed(store):
    for index, (app_name, category, duration, day) in enumerate(
        [
            ("Python docs", "learning", 3600, "2026-10-19"),
            ("Editor", "productive", 90, "2026-10-19"),
            ("Reddit", "distraction", 61, "2026-10-18"),
        ]
    ):
        store.insert(
            SessionRecord(
                app_name=app_name,
                category=Category(category),
                duration=duration,
                date=day,
                timestamp=index,
            )
        )


def test_format_duration():
    assert format_duration(0) == "00:00:00"
    assert format_duration(3661) == "01:01:01"


def test_print_today(store, capsys):
    _seed(store)

    SummaryPrinter(store).print_today()

    out = capsys.readouterr().out
    assert "learning     01:00:00" in out
    assert "productive   00:01:30" in out
    assert "distraction" not in out
    assert "total        01:01:30" in out


def test_print_trend_and_history(store, capsys):
    _seed(store)
    printer = SummaryPrinter(store)

    printer.print_trend(7)
    printer.print_history(limit=10)

    out = capsys.readouterr().out
    assert "2026-10-18" in out
    assert "Reddit" in out
    assert out.index("Editor") < out.index("Reddit")


def test_empty_store_messages(store, capsys):
    printer = SummaryPrinter(store)

    printer.print_today()
    printer.print_career()

    out = capsys.readouterr().out
    assert "No sessions recorded today." in out
    assert "Career XP: 00:00:00 (0 h)" in out


def test_cli_xp_reads_given_database(store):
    _seed(store)

    result = CliRunner().invoke(app, ["xp", "--db", str(store.db_path)])

    assert result.exit_code == 0
    assert "Career XP: 01:01:30 (1 h)" in result.output


def test_cli_history_uses_sample_option(store):
    _seed(store)

    result = CliRunner().invoke(app, ["history", "--sample", "1", "--db", str(store.db_path)])

    assert result.exit_code == 0
    assert "Reddit" in result.output
    assert "Editor" not in result.output
