"""Tests for output routing."""

import io

from saladplate import STDIN
from saladplate.cli.output import OutputCoordinator


def test_stdout_is_default_and_shared():
    stream = io.StringIO()
    with OutputCoordinator(stream=stream) as coordinator:
        assert coordinator.write("a.txt", "A\n") == "<stdout>"
        assert coordinator.write("b.txt", "B\n") == "<stdout>"

    assert stream.getvalue() == "A\nB\n"
    assert not stream.closed


def test_combined_output_file_is_opened_once(tmp_path):
    target = tmp_path / "out" / "combined.txt"

    with OutputCoordinator(output=str(target)) as coordinator:
        coordinator.write("a.txt", "A\n")
        handle = coordinator._handle
        coordinator.write("b.txt", "B\n")
        assert coordinator._handle is handle

    assert handle.closed
    assert target.read_text() == "A\nB\n"


def test_combined_output_is_not_created_without_writes(tmp_path):
    target = tmp_path / "combined.txt"
    with OutputCoordinator(output=str(target)):
        pass
    assert not target.exists()


def test_output_overrides_directory(tmp_path):
    coordinator = OutputCoordinator(output=str(tmp_path / "o.txt"), directory=str(tmp_path / "d"), suffix=".x")
    assert coordinator.destination_for("in.tmpl") == str(tmp_path / "o.txt")


def test_directory_output_per_document(tmp_path):
    out = tmp_path / "build"

    with OutputCoordinator(directory=str(out)) as coordinator:
        written = coordinator.write(str(tmp_path / "src" / "app.conf"), "app\n")

    assert written == str(out / "app.conf")
    assert (out / "app.conf").read_text() == "app\n"


def test_suffix_replaces_extension(tmp_path):
    coordinator = OutputCoordinator(directory=str(tmp_path), suffix=".conf")

    assert coordinator.destination_for("templates/nginx.conf.tmpl") == str(tmp_path / "nginx.conf.conf")
    assert coordinator.destination_for("templates/app.tmpl") == str(tmp_path / "app.conf")
    assert coordinator.destination_for("templates/Makefile") == str(tmp_path / "Makefile")


def test_stdin_name_in_directory_mode(tmp_path):
    coordinator = OutputCoordinator(directory=str(tmp_path))
    assert coordinator.destination_for(STDIN) == str(tmp_path / "stdin")


def test_stdin_written_in_directory_mode_with_suffix(tmp_path):
    with OutputCoordinator(directory=str(tmp_path / "out"), suffix=".txt") as coordinator:
        written = coordinator.write(STDIN, "from stdin\n")

    assert written == str(tmp_path / "out" / "stdin")
    assert (tmp_path / "out" / "stdin").read_text() == "from stdin\n"
