from fakes import calculator_elements
from mortgage_agent.dom.scoring import rank_elements, score_element, target_phrase


def _best(instruction, method="click"):
    elements = calculator_elements()
    for i, e in enumerate(elements):
        e["id"] = str(i)
    return rank_elements(elements, instruction, method, top_k=1)[0]


def test_target_phrase_drops_payload():
    assert "120000" not in target_phrase("Type '120000' into the annual income field")
    assert "annual income field" in target_phrase("Type '120000' into the annual income field")


def test_field_instructions_pick_matching_input():
    assert _best("Click the location input field")["dom_id"] == "municipality"
    assert _best("Click the annual income input field")["dom_id"] == "annualIncome"
    assert _best("Type '2000' into the monthly expenses field", "fill")["dom_id"] == "monthlyExpenses"
    assert _best("Type '500' into the monthly debt payments field", "fill")["dom_id"] == "monthlyDebt"
    assert _best("Click on House")["dom_id"] == "house"


def test_fill_prefers_inputs_over_buttons():
    button = {"id": "1", "name": "Next", "role": "button"}
    textbox = {"id": "2", "name": "Next payment", "role": "textbox"}
    instruction = "Type '10' into the next payment field"
    assert score_element(textbox, instruction, "fill") > score_element(button, instruction, "fill")


def test_destructive_and_garbage_penalties():
    instruction = "Click on House"
    house = {"id": "1", "name": "House", "role": "radio"}
    reset = {"id": "2", "name": "Reset House", "role": "button"}
    junk = {"id": "3", "name": "7", "role": "button"}
    assert score_element(house, instruction) > score_element(reset, instruction)
    assert score_element(junk, instruction) < 0


if __name__ == "__main__":
    test_target_phrase_drops_payload()
    test_field_instructions_pick_matching_input()
    test_fill_prefers_inputs_over_buttons()
    test_destructive_and_garbage_penalties()
    print("Scoring tests passed!")
