"""Tests for install module."""

from __future__ import annotations

import filecmp
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from oracle_skills.agents import AGENTS, AgentId
from oracle_skills.context import RunContext
from oracle_skills.discovery import Discovery, Skill
from oracle_skills.install import Installer, is_skill_name
from oracle_skills.resolve import InstallPlan


@pytest.fixture
def installer() -> Installer:
    """Create an Installer instance using factory method."""
    return Installer.create()


@pytest.fixture
def run(tmp_path: Path, project_dir: Path) -> RunContext:
    """Create a run context for local installs."""
    return RunContext.create(tmp_path / "tmp", project_dir=project_dir)


@pytest.fixture
def skills(sample_checkout: Path) -> list[Skill]:
    """Discover the sample skills."""
    return Discovery.create().discover_sorted(sample_checkout)


def _trees_equal(left: Path, right: Path) -> bool:
    """Compare two directory trees byte for byte."""
    cmp = filecmp.dircmp(left, right)
    if cmp.left_only or cmp.right_only or cmp.funny_files:
        return False
    _, mismatch, errors = filecmp.cmpfiles(left, right, cmp.common_files, shallow=False)
    if mismatch or errors:
        return False
    return all(_trees_equal(left / d, right / d) for d in cmp.common_dirs)


class TestInstall:
    """Tests for Installer.install."""

    def test_installs_to_local_dir(
        self, installer: Installer, skills: list[Skill], run: RunContext, project_dir: Path
    ) -> None:
        """Test skills are copied under the project's agent directory."""
        plan = InstallPlan(skills=skills, agents=[AGENTS[AgentId.CLAUDE_CODE]])

        results = installer.install(plan, run)

        target = project_dir / ".claude" / "skills"
        assert len(results) == 1
        assert results[0].success
        assert results[0].target_dir == target
        assert results[0].installed == ["feel", "recap", "rrr"]
        for skill in skills:
            assert _trees_equal(skill.path, target / skill.name)

    def test_installs_to_global_dir(
        self, installer: Installer, skills: list[Skill], run: RunContext, temp_home: Path
    ) -> None:
        """Test global installs use the agent's home directory."""
        plan = InstallPlan(skills=skills, agents=[AGENTS[AgentId.CODEX]], global_=True)

        results = installer.install(plan, run)

        target = temp_home / ".codex" / "skills"
        assert results[0].target_dir == target
        assert (target / "recap" / "scripts" / "recap.ts").exists()

    def test_multiple_agents(
        self, installer: Installer, skills: list[Skill], run: RunContext, project_dir: Path
    ) -> None:
        """Test one result is reported per agent."""
        plan = InstallPlan(
            skills=skills[:1],
            agents=[AGENTS[AgentId.CURSOR], AGENTS[AgentId.OPENCODE]],
        )

        results = installer.install(plan, run)

        assert [r.agent for r in results] == ["cursor", "opencode"]
        assert (project_dir / ".cursor" / "skills" / "feel" / "SKILL.md").exists()
        assert (project_dir / ".opencode" / "skill" / "feel" / "SKILL.md").exists()

    def test_install_twice_is_idempotent(
        self, installer: Installer, skills: list[Skill], run: RunContext, project_dir: Path
    ) -> None:
        """Test reinstalling leaves exactly one copy of the source."""
        plan = InstallPlan(skills=skills, agents=[AGENTS[AgentId.CLAUDE_CODE]])
        target = project_dir / ".claude" / "skills"

        installer.install(plan, run)
        (target / "rrr" / "stale.md").write_text("left over from an older version")
        (target / "rrr" / "SKILL.md").write_text("locally edited")
        installer.install(plan, run)

        for skill in skills:
            assert _trees_equal(skill.path, target / skill.name)

    def test_replaces_file_with_same_name(
        self, installer: Installer, skills: list[Skill], run: RunContext, project_dir: Path
    ) -> None:
        """Test a plain file in the way of a skill is replaced."""
        target = project_dir / ".claude" / "skills"
        target.mkdir(parents=True)
        (target / "rrr").write_text("not a directory")

        plan = InstallPlan(skills=skills, agents=[AGENTS[AgentId.CLAUDE_CODE]])
        installer.install(plan, run)

        assert (target / "rrr").is_dir()

    def test_copy_failure_does_not_stop_other_skills(
        self, skills: list[Skill], run: RunContext, project_dir: Path
    ) -> None:
        """Test a failed copy is recorded and the rest still install."""
        from oracle_skills.filesystem import RealFileSystem

        real = RealFileSystem()
        fs = MagicMock(wraps=real)

        def copytree(src: Path, dst: Path) -> None:
            if src.name == "recap":
                raise PermissionError("denied")
            real.copytree(src, dst)

        fs.copytree.side_effect = copytree
        plan = InstallPlan(skills=skills, agents=[AGENTS[AgentId.CLAUDE_CODE]])

        results = Installer(filesystem=fs).install(plan, run)

        result = results[0]
        assert result.success is False
        assert result.installed == ["feel", "rrr"]
        assert "denied" in result.failed["recap"]
        assert (project_dir / ".claude" / "skills" / "rrr").is_dir()

    def test_mkdir_failure_marks_all_failed(
        self, mock_filesystem: MagicMock, skills: list[Skill], run: RunContext
    ) -> None:
        """Test an uncreatable target fails every skill for that agent only."""
        mock_filesystem.mkdir.side_effect = [PermissionError("read-only"), None]
        plan = InstallPlan(
            skills=skills, agents=[AGENTS[AgentId.CLAUDE_CODE], AGENTS[AgentId.CURSOR]]
        )

        results = Installer(filesystem=mock_filesystem).install(plan, run)

        assert set(results[0].failed) == {"feel", "recap", "rrr"}
        assert results[1].success
        assert mock_filesystem.copytree.call_count == 3

    def test_uses_filesystem_abstraction(
        self, mock_filesystem: MagicMock, skills: list[Skill], run: RunContext, project_dir: Path
    ) -> None:
        """Test existing entries are removed before copying."""
        mock_filesystem.exists.return_value = True
        mock_filesystem.is_dir.return_value = True
        plan = InstallPlan(skills=skills[:1], agents=[AGENTS[AgentId.CLAUDE_CODE]])

        Installer(filesystem=mock_filesystem).install(plan, run)

        dest = project_dir / ".claude" / "skills" / "feel"
        mock_filesystem.mkdir.assert_called_once_with(
            project_dir / ".claude" / "skills", parents=True, exist_ok=True
        )
        mock_filesystem.rmtree.assert_called_once_with(dest)
        mock_filesystem.copytree.assert_called_once_with(skills[0].path, dest)


class TestUninstall:
    """Tests for Installer.uninstall."""

    def test_removes_installed_skills(
        self, installer: Installer, skills: list[Skill], run: RunContext, project_dir: Path
    ) -> None:
        """Test named skills are removed and others are left alone."""
        agent = AGENTS[AgentId.CLAUDE_CODE]
        installer.install(InstallPlan(skills=skills, agents=[agent]), run)
        target = project_dir / ".claude" / "skills"

        results = installer.uninstall(["rrr", "recap", "not-installed"], [agent], run)

        assert results[0].installed == ["rrr", "recap"]
        assert results[0].success
        assert not (target / "rrr").exists()
        assert not (target / "recap").exists()
        assert (target / "feel").is_dir()

    def test_missing_target_dir(
        self, installer: Installer, run: RunContext
    ) -> None:
        """Test uninstalling from an agent with nothing installed is a no-op."""
        results = installer.uninstall(["rrr"], [AGENTS[AgentId.ROO]], run)
        assert results[0].installed == []
        assert results[0].success

    def test_removal_failure_recorded(
        self, mock_filesystem: MagicMock, run: RunContext
    ) -> None:
        mock_filesystem.exists.return_value = True
        mock_filesystem.is_dir.return_value = True
        mock_filesystem.rmtree.side_effect = PermissionError("busy")

        results = Installer(filesystem=mock_filesystem).uninstall(
            ["rrr"], [AGENTS[AgentId.CLAUDE_CODE]], run
        )

        assert results[0].failed == {"rrr": "busy"}

    @pytest.mark.parametrize("name", ["..", ".", "", "../skills", "sub/dir", ".hidden"])
    def test_rejects_names_outside_target(
        self,
        installer: Installer,
        skills: list[Skill],
        run: RunContext,
        project_dir: Path,
        name: str,
    ) -> None:
        """Test names that would escape the skills directory remove nothing."""
        agent = AGENTS[AgentId.CLAUDE_CODE]
        installer.install(InstallPlan(skills=skills, agents=[agent]), run)
        settings = project_dir / ".claude" / "settings.json"
        settings.write_text("{}")

        results = installer.uninstall([name], [agent], run)

        assert results[0].failed == {name: "Invalid skill name"}
        assert results[0].installed == []
        assert settings.exists()
        assert sorted(p.name for p in (project_dir / ".claude" / "skills").iterdir()) == [
            "feel",
            "recap",
            "rrr",
        ]

    def test_invalid_name_does_not_block_others(
        self, mock_filesystem: MagicMock, run: RunContext
    ) -> None:
        mock_filesystem.exists.return_value = True
        mock_filesystem.is_dir.return_value = True

        results = Installer(filesystem=mock_filesystem).uninstall(
            ["..", "rrr"], [AGENTS[AgentId.CLAUDE_CODE]], run
        )

        assert results[0].installed == ["rrr"]
        assert list(results[0].failed) == [".."]
        mock_filesystem.rmtree.assert_called_once()


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("rrr", True),
        ("skill-creator", True),
        ("", False),
        ("..", False),
        (".git", False),
        ("a/b", False),
        ("a\\b", False),
    ],
)
def test_is_skill_name(name: str, expected: bool) -> None:
    assert is_skill_name(name) is expected
