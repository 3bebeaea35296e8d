"""
End-to-end tests for the setup use case on a scripted host.
"""

from datetime import datetime

import pytest

from vmbootstrap.core.errors import (
    CloneError,
    InstallError,
    LaunchError,
    MissingPackageManagerError,
    UnsupportedPlatformError,
)
from vmbootstrap.core.models.settings import BootstrapSettings
from vmbootstrap.core.use_cases.setup import run_setup

NOW = datetime(2024, 3, 5, 14, 7, 9)


def _run(host, reporter, tmp_path, platform_id="linux", **settings):
    return run_setup(
        BootstrapSettings(**settings),
        reporter,
        registry=host.registry,
        platform_id=platform_id,
        which=host.which,
        base_dir=tmp_path,
        exec_fn=host.exec_fn,
        chdir=host.chdir,
        now=NOW,
        pid=4242,
    )


class TestFreshMachine:
    def test_installs_everything_in_order(self, bare_host, reporter, tmp_path):
        result = _run(bare_host, reporter, tmp_path)

        assert bare_host.install_steps == ["install-node", "install-git", "install-cli"]
        assert result.installed == ["node", "git", "cli"]
        assert result.cli_installed is True
        assert result.node_version == "v20.11.0"
        assert result.git_version == "git version 2.43.0"

    def test_index_update_comes_first(self, bare_host, reporter, tmp_path):
        _run(bare_host, reporter, tmp_path)
        assert bare_host.actions[0] == "update-index"

    def test_clone_and_launch_once(self, bare_host, reporter, tmp_path):
        result = _run(bare_host, reporter, tmp_path)

        assert bare_host.actions.count("clone") == 1
        assert bare_host.actions[-1] == "clone"
        assert bare_host.exec_calls == [("claude", ["claude"])]
        assert bare_host.chdir_calls == [result.repo_dir]
        assert result.launched is True

    def test_workspace_layout(self, bare_host, reporter, tmp_path):
        result = _run(bare_host, reporter, tmp_path)

        assert result.workspace == tmp_path.resolve() / "claude_workspace_20240305_140709_4242"
        assert result.workspace.is_dir()
        assert result.repo_dir == result.workspace / "backpack-test"
        clone_ctx = bare_host.git.calls_for("clone")[0]
        assert clone_ctx.working_dir == str(result.workspace)
        assert clone_ctx.action.params["url"] == "https://github.com/danielchae/backpack-test"

    def test_receipts_collected(self, bare_host, reporter, tmp_path):
        result = _run(bare_host, reporter, tmp_path)
        ids = [r.action_id for r in result.receipts]
        assert "install-node" in ids
        assert ids[-1] == "clone"
        assert all(r.ok for r in result.receipts)

    def test_status_lines(self, bare_host, reporter, tmp_path):
        _run(bare_host, reporter, tmp_path)

        infos = reporter.messages("info")
        assert "Detected OS: linux" in infos
        assert "Package manager: apt" in infos
        assert "Launching Claude Code interactive mode..." in infos
        assert reporter.messages("banner") == ["Setup Complete!"]
        assert "All dependencies installed" in reporter.messages("success")
        assert reporter.messages("error") == []

    def test_workspace_announced_before_creation(self, bare_host, reporter, tmp_path):
        result = _run(bare_host, reporter, tmp_path)

        lines = [message for _, message in reporter.lines]
        announce = lines.index(
            "Creating workspace directory: claude_workspace_20240305_140709_4242"
        )
        created = lines.index(f"Created workspace: {result.workspace}")
        assert announce < created

    def test_directory_change_reported_before_banner(self, bare_host, reporter, tmp_path):
        result = _run(bare_host, reporter, tmp_path)

        lines = [message for _, message in reporter.lines]
        changed = lines.index(f"Changed to repository directory: {result.repo_dir}")
        assert lines.index("Repository cloned successfully") < changed
        assert changed < lines.index("Setup Complete!")


class TestReadyMachine:
    def test_nothing_installed(self, ready_host, reporter, tmp_path):
        result = _run(ready_host, reporter, tmp_path)

        assert ready_host.install_steps == []
        assert result.installed == []
        assert result.cli_installed is False
        assert ready_host.exec_calls == [("claude", ["claude"])]

    def test_git_version_reported(self, ready_host, reporter, tmp_path):
        _run(ready_host, reporter, tmp_path)
        assert "Git is already installed: git version 2.43.0" in reporter.messages("success")

    def test_macos_uses_brew(self, make_host, reporter, tmp_path):
        host = make_host(binaries={"brew", "node", "npm", "git", "claude"})
        result = _run(host, reporter, tmp_path, platform_id="darwin")
        assert result.platform.package_manager.name == "brew"
        assert host.exec_calls == [("claude", ["claude"])]

    def test_custom_settings(self, make_host, reporter, tmp_path):
        host = make_host(binaries={"apt-get", "node", "npm", "git", "mytool"})
        result = _run(
            host, reporter, tmp_path,
            repo_url="https://example.com/team/app.git",
            cli_command="mytool",
            workspace_prefix="ws",
        )
        assert result.workspace.name == "ws_20240305_140709_4242"
        assert result.repo_dir.name == "app"
        assert host.exec_calls == [("mytool", ["mytool"])]


class TestFailures:
    def test_unsupported_platform_stops_before_anything(self, bare_host, reporter, tmp_path):
        with pytest.raises(UnsupportedPlatformError):
            _run(bare_host, reporter, tmp_path, platform_id="win32")
        assert bare_host.actions == []
        assert list(tmp_path.iterdir()) == []

    def test_no_package_manager(self, make_host, reporter, tmp_path):
        host = make_host(binaries=set())
        with pytest.raises(MissingPackageManagerError):
            _run(host, reporter, tmp_path)
        assert host.actions == []

    def test_clone_failure_never_launches(self, bare_host, reporter, tmp_path):
        bare_host.git.set_failure("clone", "git clone exited with code 128")

        with pytest.raises(CloneError):
            _run(bare_host, reporter, tmp_path)

        assert bare_host.exec_calls == []
        assert bare_host.chdir_calls == []
        assert not any(
            m.startswith("Changed to repository directory") for m in reporter.messages("success")
        )
        # workspace stays behind
        assert len(list(tmp_path.iterdir())) == 1

    def test_install_failure_stops_later_steps(self, bare_host, reporter, tmp_path):
        bare_host.package.set_failure("install-git", "apt-get install -y git exited with code 100")

        with pytest.raises(InstallError):
            _run(bare_host, reporter, tmp_path)

        assert "install-cli" not in bare_host.actions
        assert "clone" not in bare_host.actions
        assert list(tmp_path.iterdir()) == []

    def test_update_failure_is_not_fatal(self, bare_host, reporter, tmp_path):
        bare_host.package.set_failure("update-index", "apt-get update exited with code 100")
        result = _run(bare_host, reporter, tmp_path)
        assert result.launched is True
        assert reporter.messages("warning")

    def test_launch_failure(self, ready_host, reporter, tmp_path):
        def broken_exec(command, argv):
            raise FileNotFoundError(2, "No such file or directory", command)

        with pytest.raises(LaunchError):
            run_setup(
                BootstrapSettings(),
                reporter,
                registry=ready_host.registry,
                platform_id="linux",
                which=ready_host.which,
                base_dir=tmp_path,
                exec_fn=broken_exec,
                chdir=ready_host.chdir,
            )
