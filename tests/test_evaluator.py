from smartfill.evaluator import (
    evaluate,
    strength_label,
    strength_color,
    strength_percent,
    SPECIAL_CHARS,
)

ALL_FEEDBACK = [
    "Use at least 8 characters",
    "Add uppercase letters",
    "Add lowercase letters",
    "Add numbers",
    "Add special characters (!@#$%)",
]

def test_empty_password_is_no_input_state():
    result = evaluate("")
    assert result["score"] == 0
    assert result["feedback"] == []
    assert result["label"] == ""

def test_lowercase_only():
    result = evaluate("abcdefgh")
    assert result["score"] == 2
    assert result["feedback"] == [
        "Add uppercase letters",
        "Add numbers",
        "Add special characters (!@#$%)",
    ]
    assert result["label"] == "Weak"

def test_all_rules_satisfied():
    result = evaluate("Abcdef1!")
    assert result["score"] == 5
    assert result["feedback"] == []
    assert result["label"] == "Strong"

def test_feedback_keeps_fixed_order():
    # only the special character rule is met
    result = evaluate("%")
    assert result["score"] == 1
    assert result["feedback"] == ALL_FEEDBACK[:4]

def test_score_counts_satisfied_rules():
    for pw in ["a", "aA", "aA1", "aA1!", "aA1!aaaa", "        ", "ÄÖÜ"]:
        result = evaluate(pw)
        assert result["score"] + len(result["feedback"]) == 5

def test_non_ascii_letters_do_not_count_as_case():
    result = evaluate("éééééééé")
    assert result["score"] == 1
    assert "Add lowercase letters" in result["feedback"]

def test_every_special_char_counts():
    for ch in SPECIAL_CHARS:
        assert "Add special characters (!@#$%)" not in evaluate("a" + ch)["feedback"]
    assert "Add special characters (!@#$%)" in evaluate("a-_~")["feedback"]

def test_labels_and_bands():
    assert [strength_label(s) for s in range(6)] == ["", "Weak", "Weak", "Fair", "Good", "Strong"]
    assert [strength_color(s) for s in range(6)] == ["gray", "red", "red", "yellow", "blue", "green"]
    assert strength_percent(0) == 0
    assert strength_percent(3) == 60
    assert strength_percent(5) == 100

def test_deterministic():
    assert evaluate("Tr0ub4dor&3") == evaluate("Tr0ub4dor&3")
