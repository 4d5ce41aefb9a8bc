from pathlib import Path

import pytest
from dulwich.repo import Repo

from gitblame.blame import locate_repository
from gitblame.blame._locator import decode_path
from gitblame.exceptions import NotARepositoryError


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    Repo.init(str(root)).close()
    (root / "src" / "pkg").mkdir(parents=True)
    _ = (root / "src" / "pkg" / "mod.py").write_text("x = 1\n")
    return root.resolve()


class TestLocateRepository:
    def test_from_root(self, repo_root: Path) -> None:
        handle = locate_repository(repo_root)

        assert handle.root == repo_root
        assert handle.metadata_dir == repo_root / ".git"

    def test_from_nested_directory(self, repo_root: Path) -> None:
        assert locate_repository(repo_root / "src" / "pkg").root == repo_root

    def test_from_file(self, repo_root: Path) -> None:
        assert locate_repository(repo_root / "src" / "pkg" / "mod.py").root == repo_root

    def test_from_deleted_file(self, repo_root: Path) -> None:
        assert locate_repository(repo_root / "src" / "gone.py").root == repo_root

    def test_accepts_strings(self, repo_root: Path) -> None:
        assert locate_repository(str(repo_root / "src")).root == repo_root

    def test_symlinked_directory_resolves_to_target(
        self, repo_root: Path, tmp_path: Path
    ) -> None:
        link = tmp_path / "link"
        link.symlink_to(repo_root / "src", target_is_directory=True)

        assert locate_repository(link).root == repo_root

    def test_nested_repository_wins(self, repo_root: Path) -> None:
        inner = repo_root / "vendor" / "lib"
        inner.mkdir(parents=True)
        Repo.init(str(inner)).close()

        assert locate_repository(inner).root == inner

    def test_not_a_repository(self, tmp_path: Path) -> None:
        plain = tmp_path / "plain"
        plain.mkdir()

        with pytest.raises(NotARepositoryError) as exc_info:
            _ = locate_repository(plain)

        assert exc_info.value.path == plain.resolve()

    def test_bare_repository_is_rejected(self, tmp_path: Path) -> None:
        bare = tmp_path / "bare.git"
        bare.mkdir()
        Repo.init_bare(str(bare)).close()

        with pytest.raises(NotARepositoryError, match="bare"):
            _ = locate_repository(bare)


class TestDecodePath:
    def test_bytes(self) -> None:
        assert decode_path(b"/repo") == "/repo"

    def test_str(self) -> None:
        assert decode_path("/repo") == "/repo"
