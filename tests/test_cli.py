from typer.testing import CliRunner

from bundlecache.cli import app

from conftest import write

runner = CliRunner()

TASK_FILE = """\
options:
  base: app/
  filters:
    .html: strip
targets:
  build:
    files:
      index.html: app/widgets/*.html
  demo:
    options:
      base: app/demo/
    files:
      demo.html: [app/demo/*.dust]
"""


def test_bundle_command(project):
    result = runner.invoke(
        app,
        ["bundle", "index.html", "app/widgets/x.html", "--base", "app/", "--filter", ".html=strip"],
    )

    assert result.exit_code == 0, result.output
    assert (project / "index.html").read_text(encoding="utf-8") == (
        '<html><body>X<script type="text/ng-template" id="widgets/x.html">\n'
        "<p>x</p>\n"
        "</script></body></html>"
    )


def test_bundle_command_invalid_destination(project):
    result = runner.invoke(app, ["bundle", "nope.html", "app/widgets/x.html"])

    assert result.exit_code == 1


def test_bundle_command_missing_marker(project):
    write(project, "partial.html", "<div></div>")

    result = runner.invoke(app, ["bundle", "partial.html", "app/widgets/x.html"])

    assert result.exit_code == 1
    assert (project / "partial.html").read_text(encoding="utf-8") == "<div></div>"


def test_bundle_command_bad_filter_argument(project):
    result = runner.invoke(app, ["bundle", "index.html", "a.html", "--filter", "html"])

    assert result.exit_code == 2


def test_bundle_command_unknown_filter(project):
    result = runner.invoke(app, ["bundle", "index.html", "a.html", "--filter", ".html=nope"])

    assert result.exit_code == 1


def test_run_all_targets(project):
    write(project, "demo.html", "<body></body>")
    write(project, "bundlecache.yaml", TASK_FILE)

    result = runner.invoke(app, ["run"])

    assert result.exit_code == 0, result.output
    index = (project / "index.html").read_text(encoding="utf-8")
    assert 'id="widgets/x.html"' in index
    assert 'id="widgets/y.html"' in index
    assert (project / "demo.html").read_text(encoding="utf-8") == (
        '<body><script type="text/ng-template" id="card.dust">\n{title}\n</script></body>'
    )


def test_run_selected_target_from_other_directory(project, tmp_path_factory, monkeypatch):
    write(project, "demo.html", "<body></body>")
    config = write(project, "bundlecache.yaml", TASK_FILE)
    monkeypatch.chdir(tmp_path_factory.mktemp("elsewhere"))

    result = runner.invoke(app, ["run", "demo", "--config", str(config)])

    assert result.exit_code == 0, result.output
    assert "card.dust" in (project / "demo.html").read_text(encoding="utf-8")
    assert (project / "index.html").read_text(encoding="utf-8") == "<html><body>X</body></html>"


def test_run_uses_config_file_setting(project, monkeypatch):
    write(project, "conf/tasks.yaml", "targets:\n  build:\n    files:\n      ../index.html: ../app/demo/*\n")
    monkeypatch.setenv("BUNDLECACHE_CONFIG_FILE", "conf/tasks.yaml")

    result = runner.invoke(app, ["run"])

    assert result.exit_code == 0, result.output
    assert 'id="../app/demo/card.dust"' in (project / "index.html").read_text(encoding="utf-8")


def test_run_unknown_target(project):
    write(project, "bundlecache.yaml", TASK_FILE)

    result = runner.invoke(app, ["run", "deploy"])

    assert result.exit_code == 2


def test_run_missing_task_file(project):
    result = runner.invoke(app, ["run", "--config", "missing.yaml"])

    assert result.exit_code == 1


def test_run_stops_on_failure_without_force(project):
    write(project, "bundlecache.yaml", TASK_FILE)

    result = runner.invoke(app, ["run", "demo", "build"])

    assert result.exit_code == 1
    assert (project / "index.html").read_text(encoding="utf-8") == "<html><body>X</body></html>"


def test_run_with_force_continues(project):
    write(project, "bundlecache.yaml", TASK_FILE)

    result = runner.invoke(app, ["run", "demo", "build", "--force"])

    assert result.exit_code == 1
    assert 'id="widgets/x.html"' in (project / "index.html").read_text(encoding="utf-8")


def test_bundle_command_invalid_base_pattern(project):
    result = runner.invoke(app, ["bundle", "index.html", "app/widgets/x.html", "--base", "app/("])

    assert result.exit_code == 2
    assert (project / "index.html").read_text(encoding="utf-8") == "<html><body>X</body></html>"


def test_run_invalid_base_pattern(project):
    write(project, "bundlecache.yaml", "options:\n  base: 'app/('\ntargets:\n  build:\n    files: {index.html: app/widgets/*.html}\n")

    result = runner.invoke(app, ["run"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert (project / "index.html").read_text(encoding="utf-8") == "<html><body>X</body></html>"
