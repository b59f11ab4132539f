"""Tests for the board repositories."""

import json

import pytest

from lifeboard.core.errors import BoardNotFoundError, InvalidBoardError
from lifeboard.core.grid import Grid
from lifeboard.core.repository import InMemoryBoardRepository, JsonBoardRepository

T, F = True, False

BLINKER = Grid.from_rows([[F, F, F], [T, T, T], [F, F, F]])
BLOCK = Grid.from_rows([[T, T], [T, T]])


@pytest.fixture(params=["memory", "json"])
def repository(request, tmp_path):
    if request.param == "memory":
        return InMemoryBoardRepository()
    return JsonBoardRepository(tmp_path / "boards")


class TestBoardRepository:
    """Behavior shared by every repository."""

    def test_create_and_get(self, repository):
        """Test a created board can be fetched by id."""
        board = repository.create(BLINKER)

        fetched = repository.get(board.id)
        assert fetched is not None
        assert fetched.id == board.id
        assert fetched.grid == BLINKER

    def test_ids_are_unique(self, repository):
        """Test each board gets a fresh id."""
        first = repository.create(BLINKER)
        second = repository.create(BLINKER)
        assert first.id != second.id
        assert sorted(repository.list_ids()) == sorted([first.id, second.id])

    def test_get_unknown(self, repository):
        """Test fetching an unknown id returns None."""
        assert repository.get("0" * 32) is None

    def test_replace(self, repository):
        """Test replacing the current grid."""
        board = repository.create(BLINKER)

        updated = repository.replace(board.id, BLOCK)

        assert updated.id == board.id
        assert updated.grid == BLOCK
        assert repository.get(board.id).grid == BLOCK

    def test_replace_unknown(self, repository):
        """Test replacing an unknown board fails."""
        with pytest.raises(BoardNotFoundError) as exc_info:
            repository.replace("0" * 32, BLOCK)
        assert exc_info.value.board_id == "0" * 32


class TestJsonBoardRepository:
    """Test cases specific to the file-backed store."""

    def test_survives_new_instance(self, tmp_path):
        """Test boards are read back by a fresh repository."""
        board = JsonBoardRepository(tmp_path).create(BLINKER)

        fetched = JsonBoardRepository(tmp_path).get(board.id)
        assert fetched.grid == BLINKER

    def test_document_format(self, tmp_path):
        """Test the on-disk document layout."""
        board = JsonBoardRepository(tmp_path).create(BLOCK)

        with open(tmp_path / f"{board.id}.json") as f:
            data = json.load(f)

        assert data == {"id": board.id, "grid": [[T, T], [T, T]]}

    def test_no_temporary_files_left(self, tmp_path):
        """Test writes clean up after themselves."""
        repository = JsonBoardRepository(tmp_path)
        board = repository.create(BLINKER)
        repository.replace(board.id, BLOCK)

        assert [p.name for p in tmp_path.iterdir()] == [f"{board.id}.json"]

    def test_rejects_path_like_ids(self, tmp_path):
        """Test ids that are not generated hex strings never reach the filesystem."""
        repository = JsonBoardRepository(tmp_path / "boards")
        (tmp_path / "secret.json").write_text('{"id": "secret", "grid": [[true]]}')

        assert repository.get("../secret") is None
        with pytest.raises(BoardNotFoundError):
            repository.replace("../secret", BLOCK)

    def test_corrupt_document(self, tmp_path):
        """Test unreadable documents surface as invalid boards."""
        repository = JsonBoardRepository(tmp_path)
        board = repository.create(BLOCK)
        (tmp_path / f"{board.id}.json").write_text("{not json")

        with pytest.raises(InvalidBoardError):
            repository.get(board.id)

    def test_non_utf8_document(self, tmp_path):
        """Test undecodable documents surface as invalid boards."""
        repository = JsonBoardRepository(tmp_path)
        board = repository.create(BLOCK)
        (tmp_path / f"{board.id}.json").write_bytes(b"\xff\xfe{}")

        with pytest.raises(InvalidBoardError):
            repository.get(board.id)

    def test_jagged_document(self, tmp_path):
        """Test stored grids are validated on the way back in."""
        repository = JsonBoardRepository(tmp_path)
        board = repository.create(BLOCK)
        (tmp_path / f"{board.id}.json").write_text(json.dumps({"id": board.id, "grid": [[True], [True, False]]}))

        with pytest.raises(InvalidBoardError):
            repository.get(board.id)

    def test_creates_storage_dir(self, tmp_path):
        """Test the storage directory is created on demand."""
        JsonBoardRepository(tmp_path / "a" / "b")
        assert (tmp_path / "a" / "b").is_dir()
