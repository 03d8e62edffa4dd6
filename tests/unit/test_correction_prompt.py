"""
Unit tests for the grocery correction prompt.
"""
from app.services.correction_prompt import build_prompt, format_item_lines, format_reference


class TestFormatItemLines:

    def test_one_indexed_and_quoted(self):
        assert format_item_lines(["bred", "Amul Butr"]) == '1. "bred"\n2. "Amul Butr"'

    def test_empty_list(self):
        assert format_item_lines([]) == ""

    def test_braces_in_items_are_kept(self):
        """Test item text is not treated as a format string."""
        assert format_item_lines(["{milk}"]) == '1. "{milk}"'


class TestBuildPrompt:
    """Test prompt content and determinism."""

    def test_starts_with_task_description(self):
        prompt = build_prompt(["bred"])

        assert prompt.startswith(
            "Correct these misspelled grocery items. They may contain spelling errors, "
            "phonetic errors, and Hinglish (Hindi-English mix)."
        )

    def test_lists_every_item(self):
        prompt = build_prompt(["bred", "Amul Butr", "tamatar"])

        assert 'Items to correct:\n1. "bred"\n2. "Amul Butr"\n3. "tamatar"\n' in prompt

    def test_database_inserted_verbatim(self):
        prompt = build_prompt(["bred"], "Bread, Butter, {Milk}")

        assert "Common grocery items for reference: Bread, Butter, {Milk}\n" in prompt

    def test_missing_database_is_empty(self):
        assert "Common grocery items for reference: \n" in build_prompt(["bred"], None)
        assert build_prompt(["bred"], None) == build_prompt(["bred"], "")

    def test_contains_output_example(self):
        prompt = build_prompt(["bred"])

        assert "Return ONLY a JSON array with this exact format:" in prompt
        assert '"original": "bred",' in prompt
        assert '"corrected": "Bread",' in prompt
        assert '"confidence": 0.95,' in prompt
        assert '"suggestions": ["Bread", "Bread Slices", "Brown Bread"]' in prompt

    def test_contains_rules(self):
        prompt = build_prompt(["bred"])

        assert "- confidence: 0.0 to 1.0" in prompt
        assert "- suggestions: array of 3 alternative corrections (best first, including the corrected one)" in prompt
        assert 'preserve exact spelling (e.g., "Cinthol" not "Dettol")' in prompt
        assert prompt.endswith("- Return ONLY valid JSON, no markdown, no explanation")

    def test_deterministic(self):
        assert build_prompt(["bred", "doodh"], "Bread") == build_prompt(["bred", "doodh"], "Bread")


class TestFormatReference:
    """Test rendering of non-string reference values."""

    def test_string_kept_verbatim(self):
        assert format_reference("Bread, Butter") == "Bread, Butter"

    def test_number(self):
        assert format_reference(123) == "123"

    def test_list_joined(self):
        assert format_reference(["Bread", "Butter", "Milk"]) == "Bread, Butter, Milk"

    def test_object_as_json(self):
        assert format_reference({"dairy": ["Milk"]}) == '{"dairy": ["Milk"]}'

    def test_true(self):
        assert format_reference(True) == "true"

    def test_empty_values(self):
        for value in (None, "", 0, False, [], {}):
            assert format_reference(value) == ""

    def test_number_reaches_prompt(self):
        assert "Common grocery items for reference: 123\n" in build_prompt(["bred"], 123)
