from fakes import FakeExtractor, FakeLLM, FakePage
from mortgage_agent.agents.extractor import (
    EXTRACTION_INSTRUCTION,
    MAX_PAGE_CHARS,
    RESULT_SCHEMA,
    LLMExtractor,
    extract_results,
    focus_page_text,
    normalize_results,
)
from mortgage_agent.core.types import RESULT_FIELDS


def test_schema_covers_seven_string_fields():
    assert list(RESULT_SCHEMA) == RESULT_FIELDS
    assert len(RESULT_FIELDS) == 7
    assert set(RESULT_SCHEMA.values()) == {"string"}


def test_normalize_fills_every_field():
    for raw in (None, {}, [], {"maxPrice": None, "rate": 4.84, "unexpected": "x"}):
        record = normalize_results(raw)
        assert list(record) == RESULT_FIELDS
        assert all(isinstance(v, str) for v in record.values())
        assert "unexpected" not in record
    assert normalize_results({"rate": 4.84})["rate"] == "4.84"


def test_partial_extraction_degrades_to_empty_strings():
    extractor = FakeExtractor({"maxPrice": " $612,000 ", "rate": "4.84%"})
    record = extract_results(FakePage(), extractor)

    assert record["maxPrice"] == "$612,000"
    assert record["rate"] == "4.84%"
    assert record["remainingCash"] == ""
    assert len(record) == 7
    instruction, schema = extractor.calls[0]
    assert instruction == EXTRACTION_INSTRUCTION
    assert schema == RESULT_SCHEMA


def test_llm_extractor_non_json_gives_empty_record():
    page = FakePage()
    page.body_text = "Maximum home price you can afford $612,000"
    record = extract_results(page, LLMExtractor(llm=FakeLLM("Sorry, no data here.")))
    assert record == {field: "" for field in RESULT_FIELDS}


def test_llm_extractor_reads_json_reply():
    page = FakePage()
    page.body_text = "Maximum home price you can afford $612,000"
    llm = FakeLLM('{"maxPrice": "$612,000", "purchasePrice": "$612,000", "optionalCP": "$0"}')
    record = extract_results(page, LLMExtractor(llm=llm))
    assert record["maxPrice"] == "$612,000"
    assert record["optionalCP"] == "$0"
    assert record["monthlyPayment"] == ""
    # The page text reaches the model
    assert "$612,000" in llm.calls[0][1].content


def test_long_page_keeps_results_text():
    page = FakePage()
    page.body_text = ("Mortgages | Rates | Calculators | Contact us\n" * 300) + \
        "Maximum home price you can afford $612,000\nInterest rate 4.84%"
    assert len(page.body_text) > MAX_PAGE_CHARS

    llm = FakeLLM('{"maxPrice": "$612,000"}')
    record = extract_results(page, LLMExtractor(llm=llm))

    prompt = llm.calls[0][1].content
    assert "$612,000" in prompt
    assert "4.84%" in prompt
    assert record["maxPrice"] == "$612,000"


def test_focus_page_text_bounds():
    assert focus_page_text("short page") == "short page"
    text = "x" * 50 + "Maximum home price you can afford" + "y" * 50
    assert focus_page_text(text, limit=40).startswith("Maximum home price")
    # Heading near the end: window still spans the full limit
    assert len(focus_page_text(text, limit=100)) == 100
    assert focus_page_text("z" * 200, limit=40) == "z" * 40


if __name__ == "__main__":
    test_long_page_keeps_results_text()
    test_focus_page_text_bounds()
    test_schema_covers_seven_string_fields()
    test_normalize_fills_every_field()
    test_partial_extraction_degrades_to_empty_strings()
    test_llm_extractor_non_json_gives_empty_record()
    test_llm_extractor_reads_json_reply()
    print("Extraction tests passed!")
