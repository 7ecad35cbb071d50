"""
驗證器單元測試

測試唯讀 SQL 驗證與工具參數擷取，確保無效參數以 ToolValidationError 回報。
"""

import pytest

from core.exceptions import ToolValidationError
from tools.validators import InputValidator, SQLValidator


class TestSQLValidator:
    """唯讀 SQL 查詢驗證器測試"""

    def test_valid_simple_select(self):
        """✅ 合法的簡單 SELECT 查詢"""
        is_valid, error = SQLValidator.validate_query("SELECT * FROM blocks")
        assert is_valid is True
        assert error == ""

    def test_valid_select_with_where(self):
        """✅ 合法的 SELECT 查詢（帶 WHERE）"""
        query = "SELECT id, content FROM blocks WHERE type = 'd' AND box = '20210808180117-czj9bvb'"
        is_valid, error = SQLValidator.validate_query(query)
        assert is_valid is True
        assert error == ""

    def test_valid_select_with_join(self):
        """✅ 合法的 SELECT 查詢（帶 JOIN）"""
        query = """
            SELECT b.id, a.value
            FROM blocks b
            INNER JOIN attributes a ON a.block_id = b.id
            WHERE a.name = 'custom-status'
        """
        is_valid, error = SQLValidator.validate_query(query)
        assert is_valid is True

    def test_valid_with_cte(self):
        """✅ 合法的 WITH (CTE) 查詢"""
        query = """
            WITH docs AS (
                SELECT root_id, COUNT(*) AS total
                FROM blocks
                GROUP BY root_id
            )
            SELECT * FROM docs WHERE total > 100
        """
        is_valid, error = SQLValidator.validate_query(query)
        assert is_valid is True

    def test_valid_select_with_trailing_semicolon(self):
        """✅ 允許尾隨分號"""
        is_valid, error = SQLValidator.validate_query("SELECT * FROM blocks;")
        assert is_valid is True

    def test_updated_and_created_columns_allowed(self):
        """✅ updated / created 欄位名稱不被誤判"""
        query = "SELECT id FROM blocks WHERE updated > '20240101000000' ORDER BY created DESC"
        is_valid, error = SQLValidator.validate_query(query)
        assert is_valid is True

    def test_keywords_inside_literals_allowed(self):
        """✅ 字串常值中的關鍵字視為資料"""
        query = "SELECT * FROM blocks WHERE content LIKE '%delete the draft; then drop it%'"
        is_valid, error = SQLValidator.validate_query(query)
        assert is_valid is True

    def test_escaped_quote_in_literal(self):
        """✅ 跳脫單引號的字串常值"""
        is_valid, error = SQLValidator.validate_query("SELECT * FROM blocks WHERE content = 'it''s done'")
        assert is_valid is True

    def test_replace_function_allowed(self):
        """✅ 允許 replace() 字串函式"""
        is_valid, error = SQLValidator.validate_query("SELECT replace(content, '#', '') FROM blocks")
        assert is_valid is True

    def test_reject_empty_query(self):
        """❌ 拒絕空查詢"""
        is_valid, error = SQLValidator.validate_query("")
        assert is_valid is False
        assert "Empty" in error

    def test_reject_whitespace_only_query(self):
        """❌ 拒絕只有空白的查詢"""
        is_valid, error = SQLValidator.validate_query("   \n\t  ")
        assert is_valid is False

    @pytest.mark.parametrize("query", [
        "DELETE FROM blocks WHERE id = 'x'",
        "DROP TABLE blocks",
        "INSERT INTO blocks (id) VALUES ('x')",
        "UPDATE blocks SET content = 'hacked'",
        "ALTER TABLE blocks ADD COLUMN x",
        "PRAGMA table_info(blocks)",
        "VACUUM",
        "ATTACH DATABASE 'x.db' AS x",
    ])
    def test_reject_non_select_statement(self, query):
        """❌ 拒絕非 SELECT 陳述式"""
        is_valid, error = SQLValidator.validate_query(query)
        assert is_valid is False
        assert "Only SELECT, WITH statements are allowed" == error

    @pytest.mark.parametrize("query, keyword", [
        ("WITH x AS (SELECT 1) DELETE FROM blocks", "DELETE"),
        ("SELECT * FROM blocks WHERE id IN (SELECT id FROM x); DROP TABLE blocks", "DROP"),
        ("WITH x AS (SELECT 1) INSERT INTO blocks SELECT * FROM x", "INSERT"),
    ])
    def test_reject_dangerous_keyword(self, query, keyword):
        """❌ 拒絕含有修改資料關鍵字的查詢"""
        is_valid, error = SQLValidator.validate_query(query)
        assert is_valid is False
        assert keyword in error

    def test_reject_replace_into(self):
        """❌ 拒絕 REPLACE INTO"""
        is_valid, error = SQLValidator.validate_query("WITH x AS (SELECT 1) REPLACE INTO blocks SELECT * FROM x")
        assert is_valid is False
        assert "REPLACE" in error

    def test_reject_multiple_statements_with_semicolon(self):
        """❌ 拒絕多個陳述式"""
        is_valid, error = SQLValidator.validate_query("SELECT 1; SELECT 2")
        assert is_valid is False
        assert "Multiple statements" in error

    def test_reject_query_too_long(self):
        """❌ 拒絕超長查詢"""
        query = "SELECT * FROM blocks WHERE " + " OR ".join(["id = 'x'"] * 3000)
        is_valid, error = SQLValidator.validate_query(query)
        assert is_valid is False
        assert "too long" in error

    def test_case_insensitive_keyword_detection(self):
        """❌ 關鍵字偵測不分大小寫"""
        is_valid, error = SQLValidator.validate_query("select * from blocks; delete from blocks")
        assert is_valid is False


class TestInputValidator:
    """工具參數擷取測試"""

    def test_require_string(self):
        """✅ 取得必要字串參數"""
        assert InputValidator.require_string({"block_id": "abc"}, "block_id") == "abc"

    @pytest.mark.parametrize("args", [{}, {"block_id": None}, {"block_id": "  "}])
    def test_require_string_missing(self, args):
        """❌ 缺少必要參數"""
        with pytest.raises(ToolValidationError, match="Missing required argument: block_id"):
            InputValidator.require_string(args, "block_id")

    def test_require_string_wrong_type(self):
        """❌ 參數型別錯誤"""
        with pytest.raises(ToolValidationError, match="block_id must be a string"):
            InputValidator.require_string({"block_id": 12}, "block_id")

    def test_optional_string(self):
        """✅ 選填字串參數"""
        assert InputValidator.optional_string({}, "tag") is None
        assert InputValidator.optional_string({"tag": ""}, "tag") is None
        assert InputValidator.optional_string({"tag": "todo"}, "tag") == "todo"

    @pytest.mark.parametrize("value, expected", [(None, 10), (0, 10), (5, 5), (3.0, 3), ("7", 7)])
    def test_positive_int(self, value, expected):
        """✅ 正整數參數與預設值"""
        assert InputValidator.positive_int({"limit": value}, "limit", 10) == expected

    @pytest.mark.parametrize("value", [-1, "abc", True, [1]])
    def test_positive_int_invalid(self, value):
        """❌ 非正整數"""
        with pytest.raises(ToolValidationError, match="limit must be a positive integer"):
            InputValidator.positive_int({"limit": value}, "limit", 10)

    def test_string_list(self):
        """✅ 字串陣列，單一字串轉為陣列"""
        assert InputValidator.string_list({}, "types") is None
        assert InputValidator.string_list({"types": "d"}, "types") == ["d"]
        assert InputValidator.string_list({"types": ["d", "h"]}, "types") == ["d", "h"]

    def test_string_list_invalid(self):
        """❌ 陣列含非字串元素"""
        with pytest.raises(ToolValidationError):
            InputValidator.string_list({"types": ["d", 1]}, "types")

    @pytest.mark.parametrize("value, expected", [
        (["a", "b"], ["a", "b"]),
        ("a", ["a"]),
        ('["a", "b"]', ["a", "b"]),
        ("[not json", ["[not json"]),
    ])
    def test_id_list(self, value, expected):
        """✅ ID 清單接受陣列、單一字串與 JSON 字串"""
        assert InputValidator.id_list(value) == expected

    @pytest.mark.parametrize("value", [None, [], [""], 5, "[]"])
    def test_id_list_invalid(self, value):
        """❌ 空或無效的 ID 清單"""
        with pytest.raises(ToolValidationError, match="from_ids"):
            InputValidator.id_list(value)

    def test_exactly_one(self):
        """✅ 互斥參數僅提供一個"""
        assert InputValidator.exactly_one({"before_id": "x"}, "before_id", "after_id") == "before_id"
        assert InputValidator.exactly_one({"after_id": "y"}, "before_id", "after_id") == "after_id"

    def test_exactly_one_neither(self):
        """❌ 互斥參數皆未提供"""
        with pytest.raises(ToolValidationError, match="Must provide exactly one of: before_id or after_id"):
            InputValidator.exactly_one({}, "before_id", "after_id")

    def test_exactly_one_both(self):
        """❌ 互斥參數同時提供"""
        with pytest.raises(ToolValidationError, match="Cannot provide both before_id and after_id"):
            InputValidator.exactly_one({"before_id": "x", "after_id": "y"}, "before_id", "after_id")

    def test_at_least_one(self):
        """✅/❌ 至少提供一個參數"""
        InputValidator.at_least_one({"parent_id": "p"}, ["previous_id", "parent_id"])
        with pytest.raises(ToolValidationError, match="Must provide at least one of: previous_id, parent_id"):
            InputValidator.at_least_one({}, ["previous_id", "parent_id"])

    def test_string_map(self):
        """✅ 屬性物件的值轉為字串"""
        result = InputValidator.string_map({"attrs": {"custom-a": "x", "custom-n": 3}}, "attrs")
        assert result == {"custom-a": "x", "custom-n": "3"}

    @pytest.mark.parametrize("value", [None, {}, "x", {"custom-a": ["list"]}])
    def test_string_map_invalid(self, value):
        """❌ 無效的屬性物件"""
        with pytest.raises(ToolValidationError):
            InputValidator.string_map({"attrs": value}, "attrs")
