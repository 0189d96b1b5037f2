"""linker interactive 命令测试"""

import os
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

from linker.cli.commands.interactive import InteractiveCommand
from linker.cli.main import cli
from linker.cli.session import LinkSession
from linker.core.coordinator import OperationCoordinator
from linker.core.interfaces import IRevealService


@pytest.fixture
def temp_dir():
    """创建临时目录"""
    with tempfile.TemporaryDirectory() as tmp:
        yield Path(tmp)


@pytest.fixture
def home(temp_dir):
    (temp_dir / "doc.txt").write_text("hello")
    (temp_dir / "notes.md").write_text("notes")
    (temp_dir / "Desktop").mkdir()
    return temp_dir


class TestInteractiveCommand:
    """InteractiveCommand 测试类"""

    @pytest.fixture
    def session(self):
        coordinator = OperationCoordinator()
        yield LinkSession(coordinator, MagicMock(spec=IRevealService))
        coordinator.shutdown()

    def make_prompt(self, texts, confirms=(False,)):
        """按顺序返回预设输入的提示对象，链接名提示回车时返回默认值"""
        prompt = MagicMock()
        answers = iter(texts)

        def prompt_text(message, default=None, type=str):
            value = next(answers)
            return default if value is None else value

        prompt.prompt_text.side_effect = prompt_text
        prompt.confirm.side_effect = list(confirms)
        return prompt

    def test_default_name_accepted(self, session, home):
        """测试直接回车使用默认链接名"""
        prompt = self.make_prompt([str(home / "doc.txt"), str(home / "Desktop"), None])
        cmd = InteractiveCommand(session, prompt=prompt)

        assert cmd.execute() == 1
        assert Path(os.readlink(home / "Desktop" / "doc.txt")) == home / "doc.txt"

    def test_edited_name_used(self, session, home):
        """测试编辑后的链接名"""
        prompt = self.make_prompt([str(home / "doc.txt"), str(home / "Desktop"), "renamed"])
        cmd = InteractiveCommand(session, prompt=prompt)

        cmd.execute()

        assert (home / "Desktop" / "renamed").is_symlink()
        assert session.resolver.is_manual

    def test_file_rejected_as_destination(self, session, home):
        """测试目标不是目录时重新询问"""
        prompt = self.make_prompt([
            str(home / "doc.txt"),
            str(home / "notes.md"),
            str(home / "Desktop"),
            None,
        ])
        cmd = InteractiveCommand(session, prompt=prompt)

        assert cmd.execute() == 1
        assert prompt.prompt_text.call_count == 4

    def test_missing_source_reprompted(self, session, home):
        """测试源路径不存在时重新询问"""
        prompt = self.make_prompt([
            str(home / "missing.txt"),
            str(home / "doc.txt"),
            str(home / "Desktop"),
            None,
        ])
        cmd = InteractiveCommand(session, prompt=prompt)

        assert cmd.execute() == 1

    def test_second_round_starts_in_auto(self, session, home):
        """测试第二轮会话被清空，名字重新跟随源路径"""
        prompt = self.make_prompt(
            [
                str(home / "doc.txt"), str(home / "Desktop"), "custom",
                str(home / "notes.md"), str(home / "Desktop"), None,
            ],
            confirms=(True, False),
        )
        cmd = InteractiveCommand(session, prompt=prompt)

        assert cmd.execute() == 2
        assert (home / "Desktop" / "custom").is_symlink()
        assert (home / "Desktop" / "notes.md").is_symlink()

    def test_existing_target_counts_as_failure(self, session, home):
        """测试目标已存在时不计入成功数"""
        (home / "Desktop" / "doc.txt").write_text("precious")
        prompt = self.make_prompt([str(home / "doc.txt"), str(home / "Desktop"), None])
        cmd = InteractiveCommand(session, prompt=prompt)

        assert cmd.execute() == 0
        assert (home / "Desktop" / "doc.txt").read_text() == "precious"
        assert cmd.stats == {"created": 0, "failed": 1}
        assert "失败" in cmd.render_summary()


class TestInteractiveCli:
    """interactive 命令行测试"""

    def test_interactive_session(self, home):
        """测试通过标准输入完成一轮建链"""
        runner = CliRunner()
        user_input = "\n".join([
            str(home / "doc.txt"),
            str(home / "Desktop"),
            "",
            "n",
        ]) + "\n"

        result = runner.invoke(
            cli,
            ["--no-color", "--config", str(home / ".linker.yaml"), "interactive", "--no-reveal"],
            input=user_input,
        )

        assert result.exit_code == 0
        assert "共创建 1 个链接" in result.output
        assert "建链汇总" in result.output
        assert (home / "Desktop" / "doc.txt").is_symlink()
