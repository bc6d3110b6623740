import argparse
from pathlib import Path

import pytest
from conftest import FakeResponse

import forum_mirror
from forum_mirror import main, parse_args, parse_page_range


@pytest.mark.parametrize(
    "token, pages",
    [
        ("3..5", [3, 4, 5]),
        ("4", [1, 2, 3, 4]),
        ("7..7", [7]),
        ("5..3", []),
        ("0..2", [1, 2]),
    ],
)
def test_parse_page_range(token, pages):
    assert list(parse_page_range(token)) == pages


@pytest.mark.parametrize("token", ["", "a..b", "1..", "..4", "-3", "1-4", "2..5..7"])
def test_parse_page_range_rejects(token):
    with pytest.raises(argparse.ArgumentTypeError):
        parse_page_range(token)


def test_parse_args_defaults():
    args = parse_args(["http://forum.example/topic?start=", "1..3", "8"])
    assert args.url == "http://forum.example/topic?start="
    assert [list(r) for r in args.ranges] == [[1, 2, 3], list(range(1, 9))]
    assert args.step == 15
    assert args.force is False
    assert args.verbose is False
    assert args.workers is None
    assert args.timeout is None
    assert args.target_dir is None


def test_parse_args_flags():
    args = parse_args(["-f", "-v", "-s", "20", "-t", "/tmp/x", "--workers", "4", "u", "2"])
    assert args.force and args.verbose
    assert args.step == 20
    assert args.target_dir == "/tmp/x"
    assert args.workers == 4


def test_invalid_step_is_a_usage_error():
    with pytest.raises(SystemExit) as exc:
        parse_args(["-s", "0", "u", "1"])
    assert exc.value.code == 2


def test_config_file_supplies_defaults(tmp_path):
    cfg = tmp_path / "mirror.toml"
    cfg.write_text('step = 25\n[general]\ntarget-dir = "/srv/mirror"\nforce = true\n')
    args = parse_args(["--config", str(cfg), "u", "1"])
    assert args.step == 25
    assert args.target_dir == "/srv/mirror"
    assert args.force is True

    args = parse_args(["--config", str(cfg), "-s", "10", "u", "1"])
    assert args.step == 10


def test_yaml_config_file(tmp_path):
    cfg = tmp_path / "mirror.yaml"
    cfg.write_text("workers: 3\ntimeout: 12.5\n")
    args = parse_args(["--config", str(cfg), "u", "1"])
    assert args.workers == 3
    assert args.timeout == 12.5


def test_main_without_pages_is_a_usage_error(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["-t", str(tmp_path), "http://forum.example/topic?start="])
    assert exc.value.code == 2


def test_main_exits_when_ledger_cannot_be_created(tmp_path):
    target = tmp_path / "file"
    target.write_text("")
    with pytest.raises(SystemExit) as exc:
        main(["-t", str(target), "http://forum.example/topic?start=", "1"])
    assert exc.value.code == 1


def test_main_reports_failed_pages_without_error_status(tmp_path, fake_web, capsys):
    routes, _ = fake_web
    routes["http://forum.example/topic?start=0"] = FakeResponse(b"<p>1</p>", "text/html")
    main(["-t", str(tmp_path), "http://forum.example/topic?start=", "2"])

    out = capsys.readouterr().out
    assert "1 page(s) failed: 2" in out
    assert Path(tmp_path / "1" / "forum.example" / "topic.html").is_file()
    assert (tmp_path / "failures.lst").read_text() == "2\n"


def test_config_file_supplies_page_ranges(tmp_path, fake_web):
    routes, sessions = fake_web
    for n in (1, 2):
        routes[f"http://forum.example/topic?start={15 * (n - 1)}"] = FakeResponse(
            f"<p>{n}</p>".encode(), "text/html"
        )
    cfg = tmp_path / "mirror.toml"
    cfg.write_text('ranges = ["1..2"]\nurl = "http://ignored.example/"\n')
    out = tmp_path / "out"

    main(["--config", str(cfg), "-t", str(out), "http://forum.example/topic?start="])

    requested = sorted(url for s in sessions for url in s.requested)
    assert requested == [
        "http://forum.example/topic?start=0",
        "http://forum.example/topic?start=15",
    ]
    assert (out / "failures.lst").read_text() == ""


def test_config_page_ranges_as_string(tmp_path):
    cfg = tmp_path / "mirror.yaml"
    cfg.write_text('ranges: "2..3 5"\n')
    args = parse_args(["--config", str(cfg), "u"])
    assert [list(r) for r in args.ranges] == [[2, 3], [1, 2, 3, 4, 5]]

    args = parse_args(["--config", str(cfg), "u", "9..9"])
    assert [list(r) for r in args.ranges] == [[9]]


def test_bad_config_page_range_is_a_usage_error(tmp_path):
    cfg = tmp_path / "mirror.toml"
    cfg.write_text('ranges = ["1..x"]\n')
    with pytest.raises(SystemExit) as exc:
        parse_args(["--config", str(cfg), "u"])
    assert exc.value.code == 2
