"""LibraryBrowser against the in-process API, plus canned server failures."""

import uuid

import httpx
import pytest

from promptlib.client import LibraryBrowser, PromptLibraryClient, PromptLibraryClientError
from promptlib.schemas import PromptCreate
from promptlib.selection import AllPrompts, FolderView, SearchView, SelectionResolver, TagView


async def _seed(api_client):
    browser = LibraryBrowser(api_client)
    coding = await browser.add_folder("Coding")
    writing = await browser.add_folder("Writing")
    email = await browser.add_tag("email")
    await api_client.create_prompt(
        PromptCreate(title="Review", content="Review {{code}}", folder_id=coding.id)
    )
    await api_client.create_prompt(
        PromptCreate(title="Mail", content="Dear {{name}}", tag_ids=[email.id])
    )
    await api_client.create_prompt(
        PromptCreate(title="Essay", content="Write about {{topic}}", folder_id=writing.id)
    )
    await browser.load()
    return browser, coding, writing, email


def _titles(prompts) -> set[str]:
    return {p.title for p in prompts}


@pytest.mark.asyncio
async def test_load_lists_everything(api_client):
    browser, coding, writing, email = await _seed(api_client)
    assert browser.current == AllPrompts()
    assert [f.name for f in browser.folders] == ["Coding", "Writing"]
    assert [t.name for t in browser.tags] == ["email"]
    assert _titles(browser.prompts) == {"Review", "Mail", "Essay"}
    assert [row.label for row in browser.sidebar() if row.selected] == ["All Prompts"]


@pytest.mark.asyncio
async def test_selection_drives_listing(api_client):
    browser, coding, writing, email = await _seed(api_client)

    assert _titles(await browser.select_folder(coding.id)) == {"Review"}
    assert _titles(await browser.select_tag(email.id)) == {"Mail"}
    assert browser.current == TagView(email.id)
    assert _titles(await browser.select_uncategorized()) == {"Mail"}

    assert _titles(await browser.search("WRITE")) == {"Essay"}
    assert browser.search_text == "WRITE"
    assert [row.label for row in browser.sidebar() if row.selected] == ["All Prompts"]

    assert _titles(await browser.select_folder(writing.id)) == {"Essay"}
    assert browser.search_text == ""

    assert _titles(await browser.search("")) == {"Review", "Mail", "Essay"}
    assert browser.current == AllPrompts()


@pytest.mark.asyncio
async def test_load_drops_stale_selection(api_client):
    browser, coding, writing, email = await _seed(api_client)
    stale = LibraryBrowser(api_client, SelectionResolver(FolderView(str(uuid.uuid4()))))
    await stale.load()
    assert stale.current == AllPrompts()
    assert len(stale.prompts) == 3


@pytest.mark.asyncio
async def test_deleting_selected_folder_returns_to_all(api_client):
    browser, coding, writing, email = await _seed(api_client)
    await browser.select_folder(coding.id)

    await browser.delete_folder(coding.id)

    assert browser.current == AllPrompts()
    assert [f.name for f in browser.folders] == ["Writing"]
    assert _titles(browser.prompts) == {"Review", "Mail", "Essay"}
    assert _titles(await browser.select_uncategorized()) == {"Review", "Mail"}


@pytest.mark.asyncio
async def test_failed_delete_of_selected_folder_still_returns_to_all(api_client):
    browser, coding, writing, email = await _seed(api_client)
    missing = str(uuid.uuid4())
    await browser.select_folder(missing)
    assert browser.prompts == []

    with pytest.raises(PromptLibraryClientError) as exc_info:
        await browser.delete_folder(missing)

    assert exc_info.value.status_code == 404
    assert browser.current == AllPrompts()
    assert len(browser.prompts) == 3
    assert len(browser.folders) == 2


@pytest.mark.asyncio
async def test_deleting_other_tag_keeps_selection(api_client):
    browser, coding, writing, email = await _seed(api_client)
    urgent = await browser.add_tag("urgent")
    await browser.select_folder(writing.id)

    await browser.delete_tag(urgent.id)

    assert browser.current == FolderView(writing.id)
    assert [t.name for t in browser.tags] == ["email"]
    assert _titles(browser.prompts) == {"Essay"}


@pytest.mark.asyncio
async def test_deleting_selected_tag_returns_to_all(api_client):
    browser, coding, writing, email = await _seed(api_client)
    await browser.select_tag(email.id)
    await browser.delete_tag(email.id)
    assert browser.current == AllPrompts()
    mail = next(p for p in browser.prompts if p.title == "Mail")
    assert mail.tags == []


@pytest.mark.asyncio
async def test_search_survives_folder_delete(api_client):
    browser, coding, writing, email = await _seed(api_client)
    await browser.search("review")
    await browser.delete_folder(coding.id)
    assert browser.current == SearchView("review")


@pytest.mark.asyncio
async def test_add_blank_names_rejected(api_client):
    browser = LibraryBrowser(api_client)
    with pytest.raises(ValueError):
        await browser.add_folder("   ")
    with pytest.raises(ValueError):
        await browser.add_tag("")
    assert browser.folders == [] and browser.tags == []


@pytest.mark.asyncio
async def test_duplicate_folder_surfaces_conflict(api_client):
    browser = LibraryBrowser(api_client)
    await browser.add_folder("Coding")
    with pytest.raises(PromptLibraryClientError) as exc_info:
        await browser.add_folder("Coding")
    assert exc_info.value.status_code == 409
    assert [f.name for f in browser.folders] == ["Coding"]


@pytest.mark.asyncio
async def test_use_and_delete_prompt(api_client):
    browser, coding, writing, email = await _seed(api_client)
    mail = next(p for p in browser.prompts if p.title == "Mail")

    session = browser.use_prompt(mail)
    assert session.title == "Mail"
    assert session.preview == "Dear {{name}}"
    session.set_value("name", "Ada")
    assert session.final_text() == "Dear Ada"

    await browser.delete_prompt(mail.id)
    assert _titles(browser.prompts) == {"Review", "Essay"}
    assert _titles(await browser.refresh_prompts()) == {"Review", "Essay"}


@pytest.mark.asyncio
async def test_save_prompt_creates_and_lists_first(api_client):
    browser, coding, writing, email = await _seed(api_client)

    created = await browser.save_prompt(
        PromptCreate(title="Standup", content="Yesterday: {{done}}", tag_ids=[email.id])
    )

    assert browser.prompts[0].id == created.id
    assert browser.prompts[0].tags[0].name == "email"
    assert len(browser.prompts) == 4
    assert created.id in {p.id for p in await api_client.list_prompts()}


@pytest.mark.asyncio
async def test_save_prompt_replaces_edited_prompt_in_place(api_client):
    browser, coding, writing, email = await _seed(api_client)
    before = [p.id for p in browser.prompts]
    mail = next(p for p in browser.prompts if p.title == "Mail")

    updated = await browser.save_prompt(
        PromptCreate(title="Mail v2", content="Hello {{name}}", folder_id=writing.id),
        prompt_id=mail.id,
    )

    assert [p.id for p in browser.prompts] == before
    edited = next(p for p in browser.prompts if p.id == mail.id)
    assert edited == updated
    assert edited.title == "Mail v2"
    assert edited.folder.name == "Writing"
    assert edited.tags == []


@pytest.mark.asyncio
async def test_added_names_sort_like_a_reload(api_client):
    browser = LibraryBrowser(api_client)
    for name in ("banana", "Cherry", "apple"):
        await browser.add_folder(name)
        await browser.add_tag(name)

    assert [f.name for f in browser.folders] == ["apple", "banana", "Cherry"]
    assert [t.name for t in browser.tags] == ["apple", "banana", "Cherry"]

    await browser.load()
    assert [f.name for f in browser.folders] == ["apple", "banana", "Cherry"]
    assert [t.name for t in browser.tags] == ["apple", "banana", "Cherry"]


@pytest.mark.asyncio
@pytest.mark.parametrize("kind", ["folder", "tag"])
async def test_failed_delete_keeps_its_error_when_refetch_fails(kind):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "DELETE":
            return httpx.Response(404, json={"detail": f"{kind.title()} not found"})
        return httpx.Response(503, json={"detail": "Service unavailable"})

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = PromptLibraryClient("http://library.test/api", http_client=http)
    initial = FolderView("f1") if kind == "folder" else TagView("t1")
    browser = LibraryBrowser(client, SelectionResolver(initial))

    with pytest.raises(PromptLibraryClientError) as exc_info:
        if kind == "folder":
            await browser.delete_folder("f1")
        else:
            await browser.delete_tag("t1")

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == f"{kind.title()} not found"
    assert browser.current == AllPrompts()
