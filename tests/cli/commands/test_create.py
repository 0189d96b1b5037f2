"""linker create 命令测试"""

import os
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from linker.cli.commands.create import CreateCommand
from linker.cli.main import cli
from linker.core.config_manager import ConfigManager
from linker.core.coordinator import OperationCoordinator
from linker.core.exceptions import ErrorKind
from linker.core.interfaces import IRevealService


@pytest.fixture
def temp_dir():
    """创建临时目录"""
    with tempfile.TemporaryDirectory() as tmp:
        yield Path(tmp)


@pytest.fixture
def home(temp_dir):
    """模拟 /Users/x 目录"""
    home_dir = temp_dir / "x"
    home_dir.mkdir()
    (home_dir / "doc.txt").write_text("hello")
    (home_dir / "Desktop").mkdir()
    return home_dir


@pytest.fixture
def config_path(temp_dir):
    return temp_dir / ".linker.yaml"


class TestCreateCommand:
    """CreateCommand 测试类"""

    @pytest.fixture
    def reveal_service(self):
        return MagicMock(spec=IRevealService)

    @pytest.fixture
    def cmd(self, config_path, reveal_service):
        coordinator = OperationCoordinator()
        yield CreateCommand(ConfigManager(config_path), coordinator, reveal_service)
        coordinator.shutdown()

    def test_empty_name_defaults_to_source_name(self, cmd, home, reveal_service):
        """测试链接名为空时使用源文件名"""
        desktop = home / "Desktop"

        result = cmd.execute(str(home / "doc.txt"), str(desktop), name="")

        assert result.succeeded
        assert result.resulting_path == desktop / "doc.txt"
        assert Path(os.readlink(desktop / "doc.txt")) == home / "doc.txt"
        reveal_service.reveal.assert_called_once_with(desktop / "doc.txt")

    def test_custom_name(self, cmd, home):
        """测试指定链接名"""
        result = cmd.execute(str(home / "doc.txt"), str(home / "Desktop"), name="notes")

        assert result.resulting_path == home / "Desktop" / "notes"

    def test_relative_source_written_absolute(self, cmd, home, monkeypatch):
        """测试命令行上的相对源路径按当前目录转换为绝对路径"""
        monkeypatch.chdir(home)

        result = cmd.execute("doc.txt", "Desktop")

        stored = Path(os.readlink(home / "Desktop" / "doc.txt"))
        assert result.succeeded
        assert stored.is_absolute()
        assert stored.resolve() == (home / "doc.txt").resolve()

    def test_existing_real_file(self, cmd, home, reveal_service):
        """测试目标目录已有同名真实文件"""
        existing = home / "Desktop" / "doc.txt"
        existing.write_text("precious")

        result = cmd.execute(str(home / "doc.txt"), str(home / "Desktop"))

        assert result.error_kind == ErrorKind.ALREADY_EXISTS
        assert existing.read_text() == "precious"
        reveal_service.reveal.assert_not_called()

    def test_no_reveal(self, cmd, home, reveal_service):
        """测试关闭定位"""
        cmd.execute(str(home / "doc.txt"), str(home / "Desktop"), reveal=False)

        reveal_service.reveal.assert_not_called()

    def test_reveal_disabled_by_config(self, config_path):
        """测试配置关闭定位时使用 NullRevealService"""
        config_path.write_text("reveal:\n  enabled: false\n")

        cmd = CreateCommand(ConfigManager(config_path), OperationCoordinator())
        cmd.coordinator.shutdown()

        assert cmd.reveal_service.reveal(Path("/tmp/x")) is False

    def test_owned_coordinator_closed(self, config_path, home):
        """测试自行创建的协调器在退出时关闭"""
        with CreateCommand(ConfigManager(config_path), reveal_service=MagicMock(spec=IRevealService)) as cmd:
            result = cmd.execute(str(home / "doc.txt"), str(home / "Desktop"))

        assert result.succeeded
        with pytest.raises(RuntimeError):
            cmd.coordinator.execute(home / "doc.txt", home / "Desktop", "again")

    def test_external_coordinator_left_open(self, config_path, home, reveal_service):
        """测试外部传入的协调器不被关闭"""
        coordinator = OperationCoordinator()
        try:
            with CreateCommand(ConfigManager(config_path), coordinator, reveal_service):
                pass

            result = coordinator.execute(home / "doc.txt", home / "Desktop", "doc.txt").result(timeout=5)
        finally:
            coordinator.shutdown()

        assert result.succeeded


class TestCreateCli:
    """create 命令行测试"""

    @pytest.fixture
    def runner(self):
        return CliRunner()

    def test_create_success(self, runner, home, config_path):
        """测试命令行创建成功"""
        result = runner.invoke(cli, [
            "--no-color", "--config", str(config_path),
            "create", str(home / "doc.txt"), str(home / "Desktop"), "--no-reveal",
        ])

        assert result.exit_code == 0
        assert "符号链接已创建" in result.output
        assert (home / "Desktop" / "doc.txt").is_symlink()

    @patch("linker.core.reveal.subprocess.run")
    def test_create_reveals_by_default(self, mock_run, runner, home, config_path):
        """测试默认在文件浏览器中定位"""
        mock_run.return_value = MagicMock(returncode=0, stderr="")

        result = runner.invoke(cli, [
            "--config", str(config_path),
            "create", str(home / "doc.txt"), str(home / "Desktop"),
        ])

        assert result.exit_code == 0
        mock_run.assert_called_once()

    def test_create_wrong_kind(self, runner, home, config_path):
        """测试目标不是目录时退出码为 1"""
        result = runner.invoke(cli, [
            "--no-color", "--config", str(config_path),
            "create", str(home / "doc.txt"), str(home / "doc.txt"), "-n", "copy", "--no-reveal",
        ])

        assert result.exit_code == 1
        assert "目标必须是目录" in result.output

    def test_create_invalid_name(self, runner, home, config_path):
        """测试链接名包含分隔符"""
        result = runner.invoke(cli, [
            "--no-color", "--config", str(config_path),
            "create", str(home / "doc.txt"), str(home / "Desktop"), "-n", "a/b", "--no-reveal",
        ])

        assert result.exit_code == 1
        assert "链接名无效" in result.output

    def test_broken_config(self, runner, home, config_path):
        """测试配置文件无法解析"""
        config_path.write_text("reveal: [unclosed\n")

        result = runner.invoke(cli, [
            "--config", str(config_path),
            "create", str(home / "doc.txt"), str(home / "Desktop"),
        ])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert not (home / "Desktop" / "doc.txt").exists()
