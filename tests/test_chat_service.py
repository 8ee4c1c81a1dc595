"""
Chat service tests - dispatch flow, persistence policy and conversation management
"""

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessageChunk

from support_dispatch.agents.registry import AgentType
from support_dispatch.services.chat_service import ChatService, derive_title, retry_async
from support_dispatch.utils.errors import NotFoundError


class FailingModel:
    async def astream(self, messages):
        yield AIMessageChunk(content="Partial ")
        raise ConnectionError("connection reset by peer")


def make_service(store, reply="Here you go.", label="support", **kwargs) -> ChatService:
    kwargs.setdefault("persist_retry_delay", 0)
    return ChatService(
        store,
        llm=FakeListChatModel(responses=[reply]),
        router_llm=FakeListChatModel(responses=[label]),
        **kwargs,
    )


async def read_all(stream) -> str:
    return "".join([chunk async for chunk in stream])


def test_derive_title():
    assert derive_title("a" * 100, max_length=60) == "a" * 60 + "..."
    assert derive_title("b" * 60, max_length=60) == "b" * 60
    assert derive_title("Where is ORD-1001?", max_length=60) == "Where is ORD-1001?"


async def test_new_conversation_round_trip(store):
    service = make_service(store, reply="Your order has shipped.")

    result = await service.process_message("Where is my order ORD-1001?")
    body = await read_all(result.stream)
    await service.drain()

    assert result.agent_type == AgentType.ORDER
    assert body == "__STATUS__:Routed to order agent\nYour order has shipped."

    conversation = await store.get_conversation(result.conversation_id)
    assert [(m.role, m.content, m.agent_type) for m in conversation.messages] == [
        ("user", "Where is my order ORD-1001?", None),
        ("assistant", "Your order has shipped.", "order"),
    ]
    assert conversation.title == "Where is my order ORD-1001?"


async def test_user_message_saved_before_streaming(store):
    service = make_service(store)

    result = await service.process_message("How do I reset my password?")

    messages = await store.list_messages(result.conversation_id)
    assert [m.role for m in messages] == ["user"]
    await read_all(result.stream)
    await service.drain()


async def test_long_first_message_title_is_truncated(store):
    service = make_service(store)
    content = "x" * 100

    result = await service.process_message(content)
    await read_all(result.stream)
    await service.drain()

    conversation = await store.get_conversation(result.conversation_id)
    assert conversation.title == "x" * 60 + "..."


async def test_forty_character_title_kept_verbatim(store):
    service = make_service(store)
    content = "y" * 40

    result = await service.process_message(content)
    await read_all(result.stream)
    await service.drain()

    assert (await store.get_conversation(result.conversation_id)).title == content


async def test_title_set_once(store):
    service = make_service(store)
    first = await service.process_message("How do I reset my password?")
    await read_all(first.stream)
    await service.drain()

    second = await service.process_message("What about my account?", first.conversation_id)
    await read_all(second.stream)
    await service.drain()

    conversation = await store.get_conversation(first.conversation_id)
    assert conversation.title == "How do I reset my password?"
    assert len(conversation.messages) == 4


async def test_unknown_conversation(store):
    service = make_service(store)
    with pytest.raises(NotFoundError, match="Conversation not found"):
        await service.process_message("hello", "does-not-exist")


async def test_follow_up_inherits_previous_agent(store):
    service = make_service(store, reply="Invoice INV-2002 is for $149.99.", label="order")
    first = await service.process_message("Show invoice INV-2002")
    await read_all(first.stream)
    await service.drain()

    second = await service.process_message("ok, when?", first.conversation_id)
    await read_all(second.stream)
    await service.drain()

    assert second.agent_type == AgentType.BILLING


async def test_closed_stream_persists_partial_text(store):
    service = make_service(store, reply="Hello world", persist_partial_on_disconnect=True)

    result = await service.process_message("How do I reset my password?")
    await result.stream.__anext__()
    partial = await result.stream.__anext__() + await result.stream.__anext__()
    await result.stream.aclose()
    await service.drain()

    messages = await store.list_messages(result.conversation_id)
    assert [(m.role, m.content) for m in messages][-1] == ("assistant", partial)


async def test_closed_stream_persists_nothing_when_disabled(store):
    service = make_service(store, reply="Hello world", persist_partial_on_disconnect=False)

    result = await service.process_message("How do I reset my password?")
    await result.stream.__anext__()
    await result.stream.__anext__()
    await result.stream.aclose()
    await service.drain()

    messages = await store.list_messages(result.conversation_id)
    assert [m.role for m in messages] == ["user"]


async def test_upstream_failure_persists_partial_text(store):
    service = ChatService(
        store,
        llm=FailingModel(),
        router_llm=FakeListChatModel(responses=["support"]),
        persist_retry_delay=0,
    )

    result = await service.process_message("How do I reset my password?")
    body = await read_all(result.stream)
    await service.drain()

    assert body == "__STATUS__:Routed to support agent\nPartial "
    messages = await store.list_messages(result.conversation_id)
    assert messages[-1].content == "Partial "


async def test_persistence_retries_transient_failure(store, monkeypatch):
    service = make_service(store, persist_retry_attempts=3)
    conversation = await store.create_conversation()
    real_append = store.append_message
    attempts = []

    async def flaky_append(*args, **kwargs):
        attempts.append(args)
        if len(attempts) == 1:
            raise RuntimeError("database is locked")
        return await real_append(*args, **kwargs)

    monkeypatch.setattr(store, "append_message", flaky_append)

    assert await service.save_assistant_message(conversation.id, "Done.", AgentType.SUPPORT) is True
    assert len(attempts) == 2
    assert [m.content for m in await store.list_messages(conversation.id)] == ["Done."]


async def test_persistence_failure_is_dropped(store, monkeypatch):
    """After the last attempt the failure is logged, never raised"""
    service = make_service(store, persist_retry_attempts=2)
    conversation = await store.create_conversation()

    async def broken_append(*args, **kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(store, "append_message", broken_append)

    assert await service.save_assistant_message(conversation.id, "Done.", AgentType.SUPPORT) is False


async def test_retry_async_gives_up():
    calls = []

    async def always_fails():
        calls.append(1)
        raise RuntimeError("nope")

    assert await retry_async(always_fails, "test op", attempts=3, delay=0) is False
    assert len(calls) == 3


async def test_conversation_management(store):
    service = make_service(store)
    result = await service.process_message("How do I reset my password?")
    await read_all(result.stream)
    await service.drain()

    assert [c.id for c in await service.list_conversations()] == [result.conversation_id]
    assert (await service.get_conversation(result.conversation_id)).id == result.conversation_id

    await service.delete_conversation(result.conversation_id)

    with pytest.raises(NotFoundError):
        await service.get_conversation(result.conversation_id)
    with pytest.raises(NotFoundError):
        await service.delete_conversation(result.conversation_id)
    assert await store.list_messages(result.conversation_id) == []
