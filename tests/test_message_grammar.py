import pytest

from courier.chat import ChatMessage, Identity
from courier.errors import CommandError
from courier.parsing import COMPOSE_FLAGS, EDIT_FLAGS, MessageComposer, MessageFlag, ParserState, parse_message_args
from courier.payload import EmbedDocument, EmbedFooter


@pytest.mark.asyncio
async def test_content_and_attachment(invoker: Identity) -> None:
    payload = await parse_message_args('-c "hello world" -att http://x/y.png', invoker)
    assert payload.to_dict() == {"content": "hello world", "files": ["http://x/y.png"]}
    assert payload.embed is None


@pytest.mark.asyncio
async def test_plain_text_becomes_content(invoker: Identity) -> None:
    payload = await parse_message_args("just some words\nover two lines", invoker)
    assert payload.content == "just some words\nover two lines"
    assert payload.files == []


@pytest.mark.asyncio
async def test_multiple_attachments_keep_order(invoker: Identity) -> None:
    payload = await parse_message_args("-f a.png -att b.png -attttachment a.png -attachment c.png", invoker)
    assert payload.files == ["a.png", "b.png", "a.png", "c.png"]
    assert payload.content is None


@pytest.mark.parametrize("first, second", [("-c", "-c"), ("-content", "-txt"), ("-text", "-c")])
@pytest.mark.asyncio
async def test_content_set_twice_fails(invoker: Identity, first: str, second: str) -> None:
    with pytest.raises(CommandError, match="^Content set more than once$"):
        await parse_message_args(f"{first} foo {second} bar", invoker)


@pytest.mark.asyncio
async def test_content_flag_then_rest_fails(invoker: Identity) -> None:
    with pytest.raises(CommandError, match="Content set more than once"):
        await parse_message_args("-c foo and then more", invoker)


@pytest.mark.asyncio
async def test_unknown_flag(invoker: Identity) -> None:
    with pytest.raises(CommandError, match="Argument bogus is unknown/unexpected here"):
        await parse_message_args("-bogus 1", invoker)


@pytest.mark.asyncio
async def test_insert_is_unknown_when_composing(invoker: Identity) -> None:
    with pytest.raises(CommandError, match="Argument insert is unknown/unexpected here"):
        await parse_message_args("-insert", invoker)


@pytest.mark.asyncio
async def test_missing_flag_argument(invoker: Identity) -> None:
    with pytest.raises(CommandError, match="Not enough arguments"):
        await parse_message_args("-c", invoker)


@pytest.mark.asyncio
async def test_empty_args_yield_empty_payload(invoker: Identity) -> None:
    payload = await parse_message_args("   ", invoker)
    assert payload.is_empty()


@pytest.mark.asyncio
async def test_payload_without_embed_flag_leaves_embeds_unset(invoker: Identity) -> None:
    payload = await parse_message_args("-c hi", invoker)
    assert payload.embeds is None


@pytest.mark.asyncio
async def test_blank_embed_counts_as_empty(invoker: Identity) -> None:
    payload = await parse_message_args("-embed", invoker)
    assert payload.embeds == [EmbedDocument()]
    assert payload.is_empty()

    payload = await parse_message_args("-embed -title T", invoker)
    assert not payload.is_empty()


def _original(invoker: Identity) -> ChatMessage:
    embed = EmbedDocument(title="Old title", description="Old body", footer=EmbedFooter(text="Old footer"))
    return ChatMessage(id="1", channel=None, content="old text", author=invoker, embeds=(embed,))


@pytest.mark.asyncio
async def test_insert_copies_original_content_and_embeds(invoker: Identity) -> None:
    original = _original(invoker)
    payload = await parse_message_args("-ins -att new.png", invoker, original)

    assert payload.content == "old text"
    assert payload.files == ["new.png"]
    assert payload.embed == original.embeds[0]
    assert payload.embed is not original.embeds[0]


@pytest.mark.asyncio
async def test_insert_claims_content(invoker: Identity) -> None:
    with pytest.raises(CommandError, match="Content set more than once"):
        await parse_message_args("-insert -c replaced", invoker, _original(invoker))


@pytest.mark.asyncio
async def test_insert_then_embed_amends_inherited_embed(invoker: Identity) -> None:
    original = _original(invoker)
    payload = await parse_message_args("-insert -embed -title New -footericon http://i.png", invoker, original)

    embed = payload.embed
    assert embed is not None
    assert embed.title == "New"
    assert embed.description == "Old body"
    assert embed.footer == EmbedFooter(text="Old footer", icon_url="http://i.png")
    assert original.embeds[0].title == "Old title"


@pytest.mark.asyncio
async def test_embed_grammar_consumes_rest_of_input(invoker: Identity) -> None:
    with pytest.raises(CommandError, match="Argument att is unknown/unexpected here"):
        await parse_message_args("-embed -title x -att y.png", invoker)


@pytest.mark.asyncio
async def test_flags_before_embed_are_kept(invoker: Identity) -> None:
    payload = await parse_message_args('-c "see below" -f a.png -embed -title T', invoker)
    assert payload.to_dict() == {"content": "see below", "files": ["a.png"], "embed": {"title": "T"}}


def test_edit_table_extends_compose_table() -> None:
    assert "insert" not in COMPOSE_FLAGS
    assert EDIT_FLAGS["ins"] is MessageFlag.INSERT
    assert all(EDIT_FLAGS[name] is flag for name, flag in COMPOSE_FLAGS.items())


@pytest.mark.asyncio
async def test_insert_without_original_is_a_command_error(invoker: Identity) -> None:
    composer = MessageComposer(ParserState(""), invoker)
    with pytest.raises(CommandError, match="There is no message to insert from"):
        await composer.apply(MessageFlag.INSERT)


@pytest.mark.asyncio
async def test_insert_keeps_embed_fields_the_grammar_does_not_edit(invoker: Identity) -> None:
    fields = [{"name": "When", "value": "Friday", "inline": True}]
    embed = EmbedDocument(title="Old title", extra={"fields": fields, "thumbnail": {"url": "http://t.png"}})
    original = ChatMessage(id="1", channel=None, content="old", author=invoker, embeds=(embed,))

    payload = await parse_message_args("-insert -embed -title New", invoker, original)

    assert payload.to_dict()["embed"] == {
        "fields": fields,
        "thumbnail": {"url": "http://t.png"},
        "title": "New",
    }
