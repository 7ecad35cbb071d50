"""
工具分派器單元測試

測試 ToolDispatcher 的回應正規化、錯誤隔離與工具/提示列表行為。
"""

import asyncio
import json
import logging

import pytest

from core.exceptions import ToolValidationError, UnknownPromptError
from protocol.dispatcher import ToolDispatcher
from protocol.prompts import USAGE_GUIDE_PROMPT
from tools.base import ToolHandler
from tools.registry import ToolRegistry


class EchoHandler(ToolHandler):
    name = "echo"
    description = "Return args.value"
    input_schema = {
        "type": "object",
        "properties": {"value": {"type": "string"}},
    }

    async def execute(self, args, context):
        return args.get("value")


class ConstantHandler(ToolHandler):
    description = "Return a fixed value"
    input_schema = {"type": "object", "properties": {}}

    def __init__(self, name, value):
        self._name = name
        self.value = value

    @property
    def name(self):
        return self._name

    async def execute(self, args, context):
        return self.value


class FailingHandler(ToolHandler):
    name = "fail"
    description = "Always fails"
    input_schema = {"type": "object", "properties": {}}

    def __init__(self, error):
        self.error = error

    async def execute(self, args, context):
        raise self.error


class ExclusiveHandler(ToolHandler):
    name = "exclusive"
    description = "Needs exactly one of a or b"
    input_schema = {
        "type": "object",
        "properties": {"a": {"type": "string"}, "b": {"type": "string"}},
    }

    async def execute(self, args, context):
        if bool(args.get("a")) == bool(args.get("b")):
            raise ToolValidationError("need exactly one of A or B")
        return args.get("a") or args.get("b")


class SyncHandler(ToolHandler):
    name = "sync"
    description = "Synchronous execute"
    input_schema = {"type": "object", "properties": {}}

    def execute(self, args, context):
        return {"sync": True}


class ContextRecordingHandler(ToolHandler):
    name = "record"
    description = "Remember the context it was called with"
    input_schema = {"type": "object", "properties": {}}

    def __init__(self):
        self.seen = []

    async def execute(self, args, context):
        self.seen.append(context)


@pytest.fixture
def make_dispatcher(context):
    def _make(*handlers):
        return ToolDispatcher(ToolRegistry(handlers), context)
    return _make


def text_of(envelope):
    assert len(envelope["content"]) == 1
    assert envelope["content"][0]["type"] == "text"
    return envelope["content"][0]["text"]


class TestCallToolNormalization:
    """成功結果正規化"""

    @pytest.mark.asyncio
    async def test_none_result_becomes_success(self, make_dispatcher):
        """✅ None 結果回傳 Success"""
        dispatcher = make_dispatcher(ConstantHandler("nothing", None))

        envelope = await dispatcher.call_tool("nothing", {})

        assert envelope == {"content": [{"type": "text", "text": "Success"}], "isError": False}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["hi", "", "  padded  ", "多語言 ✅", "{\"not\": \"parsed\"}"])
    async def test_string_result_verbatim(self, make_dispatcher, value):
        """✅ 字串結果原樣回傳"""
        dispatcher = make_dispatcher(ConstantHandler("text", value))

        envelope = await dispatcher.call_tool("text", {})

        assert envelope["isError"] is False
        assert text_of(envelope) == value

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [
        {"a": 1, "b": [1, 2, 3], "c": {"nested": None}},
        [{"id": "20240101120000-abc1234", "content": "筆記"}],
        42,
        True,
        [],
        {},
    ])
    async def test_structured_result_round_trips(self, make_dispatcher, value):
        """✅ 結構化結果可由文字還原"""
        dispatcher = make_dispatcher(ConstantHandler("data", value))

        envelope = await dispatcher.call_tool("data", {})

        assert envelope["isError"] is False
        assert json.loads(text_of(envelope)) == value

    @pytest.mark.asyncio
    async def test_structured_result_is_pretty_printed(self, make_dispatcher):
        """✅ 結構化結果以縮排 JSON 呈現且保留非 ASCII 字元"""
        dispatcher = make_dispatcher(ConstantHandler("data", {"title": "日記"}))

        text = text_of(await dispatcher.call_tool("data", {}))

        assert text == '{\n  "title": "日記"\n}'

    @pytest.mark.asyncio
    async def test_serialization_is_deterministic(self, make_dispatcher):
        """✅ 相同結果多次呼叫產生相同文字"""
        dispatcher = make_dispatcher(ConstantHandler("data", {"z": 1, "a": [1, {"b": 2}]}))

        first = await dispatcher.call_tool("data", {})
        second = await dispatcher.call_tool("data", {})

        assert first == second

    @pytest.mark.asyncio
    async def test_sync_execute_supported(self, make_dispatcher):
        """✅ 同步 execute 亦可被分派"""
        dispatcher = make_dispatcher(SyncHandler())

        envelope = await dispatcher.call_tool("sync", {})

        assert json.loads(text_of(envelope)) == {"sync": True}


class TestCallToolErrors:
    """錯誤隔離"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error, message", [
        (ValueError("boom"), "boom"),
        (RuntimeError("workspace unreachable"), "workspace unreachable"),
        (ToolValidationError("Missing required argument: block_id"), "Missing required argument: block_id"),
    ])
    async def test_handler_error_becomes_envelope(self, make_dispatcher, error, message):
        """❌ 處理器例外轉為錯誤回應"""
        dispatcher = make_dispatcher(FailingHandler(error))

        envelope = await dispatcher.call_tool("fail", {})

        assert envelope == {"content": [{"type": "text", "text": "Error: " + message}], "isError": True}

    @pytest.mark.asyncio
    async def test_error_without_message_uses_type_name(self, make_dispatcher):
        """❌ 無訊息的例外以類型名稱呈現"""
        dispatcher = make_dispatcher(FailingHandler(KeyError()))

        envelope = await dispatcher.call_tool("fail", {})

        assert text_of(envelope) == "Error: KeyError"

    @pytest.mark.asyncio
    async def test_dispatcher_keeps_serving_after_failure(self, make_dispatcher):
        """✅ 失敗後仍可繼續處理請求"""
        dispatcher = make_dispatcher(FailingHandler(RuntimeError("boom")), EchoHandler())

        failed = await dispatcher.call_tool("fail", {})
        succeeded = await dispatcher.call_tool("echo", {"value": "still alive"})

        assert failed["isError"] is True
        assert succeeded == {"content": [{"type": "text", "text": "still alive"}], "isError": False}

    @pytest.mark.asyncio
    async def test_unknown_tool_returns_envelope(self, make_dispatcher):
        """❌ 未知工具回傳錯誤而非拋出例外"""
        dispatcher = make_dispatcher(EchoHandler())

        envelope = await dispatcher.call_tool("does_not_exist", {"value": 1})

        assert envelope["isError"] is True
        assert text_of(envelope) == "Error: Unknown tool: does_not_exist"

    @pytest.mark.asyncio
    async def test_unserializable_result_becomes_envelope(self, make_dispatcher):
        """❌ 無法序列化的結果轉為錯誤回應"""
        dispatcher = make_dispatcher(ConstantHandler("bad", {"value": object()}))

        envelope = await dispatcher.call_tool("bad", {})

        assert envelope["isError"] is True
        assert text_of(envelope).startswith("Error: ")


class TestContextAndLogging:
    """執行上下文與日誌"""

    @pytest.mark.asyncio
    async def test_same_context_passed_to_every_call(self, make_dispatcher):
        """✅ 每次呼叫皆傳入同一個執行上下文"""
        handler = ContextRecordingHandler()
        dispatcher = make_dispatcher(handler)

        await dispatcher.call_tool("record", {})
        await dispatcher.call_tool("record", {"ignored": 1})

        assert len(handler.seen) == 2
        assert all(seen is dispatcher.context for seen in handler.seen)

    @pytest.mark.asyncio
    async def test_call_and_failure_are_logged(self, make_dispatcher, caplog):
        """✅ 記錄工具呼叫與執行失敗"""
        dispatcher = make_dispatcher(FailingHandler(RuntimeError("kaput")))

        with caplog.at_level(logging.INFO, logger="siyuan_mcp"):
            await dispatcher.call_tool("fail", {})

        messages = [record.getMessage() for record in caplog.records]
        assert "Tool called: fail" in messages
        assert "Tool execution failed: kaput" in messages


class TestScenarios:
    """代表性情境"""

    @pytest.mark.asyncio
    async def test_echo(self, make_dispatcher):
        """✅ echo 工具回傳 args.value"""
        dispatcher = make_dispatcher(EchoHandler())

        envelope = await dispatcher.call_tool("echo", {"value": "hi"})

        assert envelope == {"content": [{"type": "text", "text": "hi"}], "isError": False}

    @pytest.mark.asyncio
    async def test_mutually_exclusive_arguments(self, make_dispatcher):
        """❌ 互斥參數同時提供時回傳處理器訊息"""
        dispatcher = make_dispatcher(ExclusiveHandler())

        envelope = await dispatcher.call_tool("exclusive", {"a": "x", "b": "y"})

        assert envelope["isError"] is True
        assert "need exactly one of A or B" in text_of(envelope)

    @pytest.mark.asyncio
    async def test_none_arguments_treated_as_empty(self, make_dispatcher):
        """✅ arguments 為 None 時視為空物件"""
        dispatcher = make_dispatcher(EchoHandler())

        envelope = await dispatcher.call_tool("echo", None)

        assert text_of(envelope) == "Success"

    @pytest.mark.asyncio
    async def test_concurrent_calls_are_isolated(self, make_dispatcher):
        """✅ 並行呼叫互不干擾"""
        dispatcher = make_dispatcher(EchoHandler())

        envelopes = await asyncio.gather(*[
            dispatcher.call_tool("echo", {"value": f"v{i}"}) for i in range(20)
        ])

        assert [text_of(e) for e in envelopes] == [f"v{i}" for i in range(20)]

    def test_list_tools_empty_registry(self, make_dispatcher):
        """✅ 空註冊表列出空清單"""
        assert make_dispatcher().list_tools() == []

    def test_list_tools_descriptors(self, make_dispatcher):
        """✅ 工具列表包含名稱、描述與 schema，順序穩定"""
        dispatcher = make_dispatcher(EchoHandler(), ExclusiveHandler())

        tools = dispatcher.list_tools()

        assert [t.name for t in tools] == ["echo", "exclusive"]
        assert tools[0].description == EchoHandler.description
        assert tools[0].inputSchema == EchoHandler.input_schema
        assert [t.name for t in dispatcher.list_tools()] == ["echo", "exclusive"]

    def test_dispatcher_freezes_registry(self, make_dispatcher):
        """✅ 建立分派器後註冊表即凍結"""
        dispatcher = make_dispatcher(EchoHandler())
        assert dispatcher.registry.frozen is True


class TestPrompts:
    """提示目錄"""

    def test_list_prompts(self, make_dispatcher):
        """✅ 列出固定的提示目錄"""
        prompts = make_dispatcher().list_prompts()

        assert [p.name for p in prompts] == [USAGE_GUIDE_PROMPT]
        assert prompts[0].description

    def test_get_prompt(self, make_dispatcher):
        """✅ 取得使用指南提示"""
        result = make_dispatcher().get_prompt(USAGE_GUIDE_PROMPT)

        assert [m.role for m in result.messages] == ["user", "assistant"]
        assert "SiYuan MCP Server Usage Guide" in result.messages[1].content.text

    def test_get_unknown_prompt_raises(self, make_dispatcher):
        """❌ 未知提示直接拋出例外"""
        with pytest.raises(UnknownPromptError, match="Unknown prompt: nope"):
            make_dispatcher().get_prompt("nope")
