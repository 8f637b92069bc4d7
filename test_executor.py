from fakes import FakePage
from mortgage_agent.core.errors import ActionExecutionError
from mortgage_agent.core.executor import execute_action


def test_click_and_fill():
    page = FakePage()
    execute_action(page, {"selector": "[id='annualIncome']", "method": "click",
                          "arguments": [], "description": "Annual income"})
    execute_action(page, {"selector": "[id='annualIncome']", "method": "fill",
                          "arguments": ["120000"], "description": "Annual income"})
    # fill focuses the input before typing
    assert page.actions == [
        ("click", "[id='annualIncome']", None),
        ("click", "[id='annualIncome']", None),
        ("fill", "[id='annualIncome']", "120000"),
    ]


def test_missing_target_raises_execution_error():
    page = FakePage()
    try:
        execute_action(page, {"selector": "[id='nope']", "method": "click",
                              "arguments": [], "description": ""})
        assert False, "expected ActionExecutionError"
    except ActionExecutionError as e:
        assert "[id='nope']" in str(e)
    assert page.actions == []


def test_invalid_actions_rejected():
    page = FakePage()
    for bad in (
        {"selector": "[id='house']", "method": "hover", "arguments": [], "description": ""},
        {"selector": "[id='annualIncome']", "method": "fill", "arguments": [], "description": ""},
        {"selector": "", "method": "click", "arguments": [], "description": ""},
    ):
        try:
            execute_action(page, bad)
            assert False, f"expected ActionExecutionError for {bad}"
        except ActionExecutionError:
            pass
    assert page.actions == []


def test_settle_failure_is_not_execution_error():
    page = FakePage()

    def broken_wait(ms):
        raise RuntimeError("page closed")

    page.wait_for_timeout = broken_wait
    try:
        execute_action(page, {"selector": "[id='house']", "method": "click",
                              "arguments": [], "description": "House"})
        assert False, "expected RuntimeError"
    except ActionExecutionError:
        assert False, "settle failure reported as a failed action"
    except RuntimeError as e:
        assert "page closed" in str(e)
    assert page.actions == [("click", "[id='house']", None)]


if __name__ == "__main__":
    test_click_and_fill()
    test_missing_target_raises_execution_error()
    test_invalid_actions_rejected()
    test_settle_failure_is_not_execution_error()
    print("Executor tests passed!")
