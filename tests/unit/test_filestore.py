import asyncio

import pytest

from pineblog.adapters.fs import filestore
from pineblog.adapters.fs.filestore import LocalFileStore
from pineblog.core.entities import FileType, UploadedFile
from pineblog.core.errors import NotFoundError, PersistenceError
from pineblog.core.result import Success

BASE_URL = "http://cdn.example.com/blog"


@pytest.fixture
def store(tmp_path):
    return LocalFileStore(tmp_path / "store", BASE_URL)


def upload(name: str, data: bytes = b"data") -> UploadedFile:
    return UploadedFile(file_name=name, data=data)


async def fill(store: LocalFileStore, directory: str, names: list[str]) -> None:
    for name in names:
        result = await store.save(upload(name), directory)
        assert result.is_success


async def test_save_writes_file(store):
    result = await store.save(upload("test.txt", b"hello world"), "docs")

    assert result == Success(None)
    assert (store.base_path / "docs" / "test.txt").read_bytes() == b"hello world"


async def test_save_overwrites(store):
    await store.save(upload("overwrite.txt", b"v1"), "docs")
    await store.save(upload("overwrite.txt", b"v2"), "docs")

    assert (store.base_path / "docs" / "overwrite.txt").read_bytes() == b"v2"


async def test_nested_folders(store):
    await store.save(upload("baz.txt", b"nested"), "foo/bar")

    assert (store.base_path / "foo" / "bar" / "baz.txt").read_bytes() == b"nested"


async def test_path_traversal(store):
    result = await store.save(upload("hack.txt"), "../..")

    assert isinstance(result.exception, PersistenceError)
    assert "traversal" in str(result.exception)


async def test_cancelled_save_leaves_no_file(store, monkeypatch):
    started = asyncio.Event()
    calls = []

    async def stalled_to_thread(func, *args):
        calls.append((func, args))
        started.set()
        await asyncio.sleep(10)

    monkeypatch.setattr(filestore.asyncio, "to_thread", stalled_to_thread)
    task = asyncio.create_task(store.save(upload("late.txt"), "docs"))
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    # The worker runs after the caller has given up
    func, args = calls[0]
    assert func(*args) is False
    assert not (store.base_path / "docs" / "late.txt").exists()


async def test_delete(store):
    await store.save(upload("zombie.txt", b"brains"), "docs")

    result = await store.delete("zombie.txt", "docs")

    assert result.is_success
    assert not (store.base_path / "docs" / "zombie.txt").exists()


async def test_delete_missing_is_not_found(store):
    result = await store.delete("ghost.txt", "docs")

    assert isinstance(result.exception, NotFoundError)
    assert result.exception.key == "docs/ghost.txt"


async def test_delete_traversal(store):
    result = await store.delete("passwd", "../../etc")

    assert isinstance(result.exception, PersistenceError)


class TestList:
    async def test_first_page_has_at_most_page_size_items(self, store):
        await fill(store, "images", [f"img{i:02d}.png" for i in range(20)])

        result = await store.list(1, 9, "images", FileType.ALL)

        listing = result.value
        assert len(listing.items) == 9
        assert listing.pager.total_items == 20
        assert listing.pager.total_pages == 3
        assert listing.pager.has_next

    async def test_pages_are_disjoint_and_ordered(self, store):
        names = [f"img{i:02d}.png" for i in range(20)]
        await fill(store, "images", list(reversed(names)))

        pages = [(await store.list(p, 9, "images", FileType.ALL)).value for p in (1, 2, 3)]

        collected = [item.name for page in pages for item in page.items]
        assert collected == names
        assert len(pages[2].items) == 2
        assert not pages[2].pager.has_next

    async def test_order_is_case_insensitive_and_stable(self, store):
        await fill(store, "", ["b.txt", "A.txt", "a.txt", "C.txt"])

        first = (await store.list(1, 9, "", FileType.ALL)).value
        second = (await store.list(1, 9, "", FileType.ALL)).value

        assert [i.name for i in first.items] == ["A.txt", "a.txt", "b.txt", "C.txt"]
        assert first.items == second.items

    async def test_page_beyond_last_is_empty(self, store):
        await fill(store, "images", ["a.png", "b.png"])

        result = await store.list(5, 9, "images", FileType.ALL)

        assert result.is_success
        assert result.value.items == []
        assert result.value.pager.total_items == 2

    async def test_page_below_one_is_empty(self, store):
        await fill(store, "images", ["a.png"])

        for page in (0, -3):
            result = await store.list(page, 9, "images", FileType.ALL)
            assert result.is_success
            assert result.value.items == []

    async def test_filters_by_file_type(self, store):
        await fill(store, "mixed", ["a.png", "b.pdf", "c.mp3", "d.JPG", "e.unknown"])

        images = (await store.list(1, 9, "mixed", FileType.IMAGE)).value
        docs = (await store.list(1, 9, "mixed", FileType.DOCUMENT)).value
        everything = (await store.list(1, 9, "mixed", FileType.ALL)).value

        assert [i.name for i in images.items] == ["a.png", "d.JPG"]
        assert [i.name for i in docs.items] == ["b.pdf"]
        assert len(everything.items) == 5

    async def test_lists_only_the_directory_itself(self, store):
        await fill(store, "top", ["a.png"])
        await fill(store, "top/nested", ["b.png"])

        listing = (await store.list(1, 9, "top", FileType.ALL)).value

        assert [i.name for i in listing.items] == ["a.png"]

    async def test_missing_directory_is_empty(self, store):
        result = await store.list(1, 9, "nowhere", FileType.ALL)

        assert result.is_success
        assert result.value.items == []
        assert result.value.pager.total_items == 0

    async def test_item_description(self, store):
        await store.save(upload("cover.png", b"12345"), "images/2024")

        (item,) = (await store.list(1, 9, "images/2024", FileType.ALL)).value.items

        assert item.name == "cover.png"
        assert item.path == "images/2024/cover.png"
        assert item.url == f"{BASE_URL}/images/2024/cover.png"
        assert item.file_type is FileType.IMAGE
        assert item.size_bytes == 5

    async def test_list_traversal(self, store):
        result = await store.list(1, 9, "../..", FileType.ALL)

        assert isinstance(result.exception, PersistenceError)
