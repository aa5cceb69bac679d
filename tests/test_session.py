"""
Test browser sessions: input coercion, input updates, uploads and the
in-memory session repository.
"""

import asyncio
import base64
import time

import pytest

from starlesson import FileInfo, Session, effect, render, ui
from starlesson.errors import SessionNotFound, UnknownInputError
from starlesson.persistence import MemoryRepo, get_memory_persistence
from starlesson.session import Inputs, coerce
from starlesson.ui import InputSpec


def test_coerce():
    """Test conversion of browser values to the type of the default."""
    assert coerce("42", 10) == 42
    assert isinstance(coerce("42", 10), int)
    assert coerce("4.5", 10) == 4.5
    assert coerce(7.0, 1) == 7 and isinstance(coerce(7.0, 1), int)
    assert coerce("", 10) is None
    assert coerce("abc", 1.5) is None
    assert coerce("true", False) is True
    assert coerce("off", True) is False
    assert coerce(1, False) is True
    assert coerce("a", ["x"]) == ["a"]
    assert coerce([1, "b"], []) == ["1", "b"]
    assert coerce("", []) == []
    assert coerce(12, "text") == "12"
    assert coerce(None, 3) is None
    print("✓ coerce works")


def test_inputs_declare_and_read():
    """Test declaring inputs and reading them by attribute or item."""
    inputs = Inputs()
    assert inputs.declare(InputSpec("n", 5)) is True
    assert inputs.declare(InputSpec("n", 99)) is False, "Redeclaring keeps the existing input"
    assert inputs.n() == 5
    assert inputs["n"]() == 5
    assert "n" in inputs and len(inputs) == 1
    assert list(inputs) == ["n"]
    assert inputs.spec("n").default == 5

    with pytest.raises(UnknownInputError) as exc_info:
        inputs.missing
    assert "missing" in str(exc_info.value)
    with pytest.raises(KeyError):
        inputs["missing"]
    with pytest.raises(ValueError):
        inputs.declare(InputSpec(ui.SESSION_SIGNAL, "x"))
    print("✓ Inputs declare/read works")


def test_inputs_update():
    """Test applying a browser payload."""
    inputs = Inputs()
    inputs.declare_all({
        "n": InputSpec("n", 5),
        "name": InputSpec("name", "World"),
        "flag": InputSpec("flag", False),
    })
    changed = inputs.update({"n": "7", "name": "World", "flag": True, "unknown": 1})
    assert changed == ["n", "flag"]
    assert inputs.snapshot() == {"n": 7, "name": "World", "flag": True}
    assert inputs.update({"n": 7}) == []
    print("✓ Inputs update works")


def test_file_upload_payload():
    """Test that Datastar file signals become FileInfo objects."""
    inputs = Inputs()
    inputs.declare(InputSpec("upload", None, kind="file"))
    assert inputs.upload() is None

    data = base64.b64encode(b"a,b\n1,2\n").decode()
    inputs.update({"upload": [data], "uploadNames": ["data.csv"], "uploadMimes": ["text/csv"]})
    files = inputs.upload()
    assert len(files) == 1
    assert isinstance(files[0], FileInfo)
    assert files[0].name == "data.csv"
    assert files[0].mime == "text/csv"
    assert files[0].size == 8
    assert files[0].text() == "a,b\n1,2\n"

    inputs.update({"upload": []})
    assert inputs.upload() is None
    print("✓ File upload payload works")


def test_file_info_data_url():
    """Test decoding a data: URL and a missing MIME type."""
    data = "data:text/plain;base64," + base64.b64encode(b"hello").decode()
    info = FileInfo.from_base64("hello.txt", None, data)
    assert info.content == b"hello"
    assert info.mime == "application/octet-stream"
    print("✓ FileInfo data URL works")


def test_session_run_and_apply():
    """Test running a server function and applying an update."""
    tree = ui.input_text("name", "Name", "World")

    def server(input, output, session):
        @render.text
        def greeting():
            return f"Hello {input.name()}!"

    session = Session()
    session.declare_inputs(ui.collect_inputs(tree))
    session.run_server(server)
    assert "greeting" in session.output

    initial = session.output.drain()
    assert len(initial) == 1
    assert initial[0][0] == "greeting"
    assert "Hello World!" in initial[0][1]

    fragments = session.apply({"name": "Ada"})
    assert [output_id for output_id, _ in fragments] == ["greeting"]
    assert "Hello Ada!" in fragments[0][1]
    assert session.apply({"name": "Ada"}) == [], "Nothing changed, nothing rendered"
    print("✓ Session run/apply works")


def test_session_close_stops_outputs():
    """Test that closing a session destroys its output renderers."""
    seen = []

    def server(input, output, session):
        @effect
        def watch():
            seen.append(input.n())

        @render.text
        def out():
            return input.n()

    session = Session()
    session.declare_inputs({"n": InputSpec("n", 1)})
    session.run_server(server)
    session.output.drain()
    session.close()
    session.apply({"n": 2})
    assert session.output.drain() == []
    assert seen == [1, 2], "Plain observers are not outputs and keep running"
    print("✓ Session close works")


def test_memory_repo_is_singleton(repo):
    """Test that every accessor returns the same repository."""
    assert MemoryRepo() is repo
    assert get_memory_persistence() is repo
    print("✓ MemoryRepo singleton works")


def test_memory_repo_save_load(repo):
    """Test storing, loading and deleting sessions."""
    session = Session()
    assert repo.save(session)
    assert repo.load(session.id) is session
    assert repo.exists(session.id)
    assert repo.require(session.id) is session
    assert len(repo) == 1

    assert repo.delete(session.id)
    assert not repo.exists(session.id)
    assert repo.load(session.id) is None
    assert not repo.delete(session.id)
    with pytest.raises(SessionNotFound):
        repo.require(session.id)
    with pytest.raises(SessionNotFound):
        repo.require(None)
    print("✓ MemoryRepo save/load works")


def test_memory_repo_ttl(repo):
    """Test that sessions expire after their TTL."""
    session = Session()
    repo.save(session, ttl=1)
    assert repo.exists(session.id)
    time.sleep(1.1)
    assert repo.load(session.id) is None
    print("✓ MemoryRepo TTL works")


def test_memory_repo_cleanup_expired(repo):
    """Test dropping every expired session at once."""
    keep, drop = Session(), Session()
    repo.save(keep)
    repo.save(drop, ttl=1)
    repo._expiry[drop.id] = time.time() - 1
    assert repo.cleanup_expired() == 1
    assert repo.exists(keep.id)
    assert not repo.exists(drop.id)
    print("✓ MemoryRepo cleanup works")


@pytest.mark.asyncio
async def test_cleanup_task(repo):
    """Test the background cleanup task."""
    repo.configure_cleanup(enabled=True, interval=0.05)
    session = Session()
    repo.save(session, ttl=1)
    repo._expiry[session.id] = time.time() - 1
    repo.start_cleanup()
    assert repo.cleanup_running
    await asyncio.sleep(0.2)
    assert len(repo) == 0
    repo.stop_cleanup()
    await asyncio.sleep(0)
    assert not repo.cleanup_running
    repo.configure_cleanup(enabled=False)
    print("✓ Cleanup task works")


def test_cleanup_needs_running_loop(repo):
    """Test that start_cleanup outside an event loop waits for the first request."""
    repo.configure_cleanup(enabled=True, interval=60)
    repo.start_cleanup()
    assert not repo.cleanup_running
    repo.configure_cleanup(enabled=False)
    print("✓ Cleanup deferred without a loop")
