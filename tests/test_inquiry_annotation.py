"""Tag extraction and message cleaning for RFQ inquiries."""
from services.inquiry_service import (
    DEFAULT_INTEREST,
    annotate_message,
    clean_message,
    compose_rfq_message,
    extract_tag,
    tag_value,
)


def test_plain_message_defaults():
    result = annotate_message("plain text, no tags")
    assert result["target_product"] is None
    assert result["interest"] == "General"
    assert result["clean_message"] == "plain text, no tags"
    assert result["tag_warnings"] == []


def test_product_and_interest_extracted():
    result = annotate_message("Quote please [Product: DRX-900] - Need urgent quote [Interest: Imaging]")
    assert result["target_product"] == "DRX-900"
    assert result["interest"] == "Imaging"


def test_tag_order_does_not_matter():
    a = annotate_message("[Interest: Imaging] [Product: X] body")
    b = annotate_message("[Product: X] [Interest: Imaging] body")
    assert a["target_product"] == b["target_product"] == "X"
    assert a["interest"] == b["interest"] == "Imaging"
    assert a["clean_message"] == b["clean_message"] == "body"


def test_leading_separator_stripped():
    assert annotate_message("[Product: Y] - Customer wants a demo")["clean_message"] == "Customer wants a demo"


def test_separator_stripped_only_once():
    assert clean_message("[Product: Y] -  - twice") == "- twice"


def test_separator_kept_when_not_leading():
    # two tags leave two spaces before the separator
    assert clean_message("[Product: X] [Interest: Y] - msg") == "- msg"


def test_every_bracket_span_removed():
    assert clean_message("Hello [Ref: 42] world [x]") == "Hello  world"


def test_unterminated_bracket_left_in_place():
    result = annotate_message("[Product: DRX-900 needs pricing")
    assert result["target_product"] is None
    assert result["clean_message"] == "[Product: DRX-900 needs pricing"


def test_first_tag_wins():
    result = annotate_message("[Product: A] [Product: B]")
    assert result["target_product"] == "A"


def test_label_is_case_sensitive():
    result = annotate_message("[product: A] [INTEREST: B]")
    assert result["target_product"] is None
    assert result["interest"] == DEFAULT_INTEREST


def test_capture_is_trimmed():
    assert extract_tag("[Product:    Ultrasound U5   ]", "Product").value == "Ultrasound U5"


def test_empty_value_is_still_a_tag():
    tag = extract_tag("[Product:   ]", "Product")
    assert tag.matched is True
    assert tag.value == ""

    result = annotate_message("[Product: ] [Product: X] [Interest:] body")
    assert result["target_product"] == ""
    assert result["interest"] == ""
    assert result["clean_message"] == "body"


def test_missing_tag_is_unmatched():
    tag = extract_tag("nothing here", "Interest")
    assert tag.matched is False
    assert tag.value is None


def test_nested_bracket_value_is_flagged():
    result = annotate_message("[Product: Analyzer [v2]] please")
    assert result["target_product"] == "Analyzer [v2"
    assert result["tag_warnings"] == ["Product"]


def test_empty_and_none_messages():
    for message in ("", None):
        result = annotate_message(message)
        assert result["target_product"] is None
        assert result["interest"] == "General"
        assert result["clean_message"] == ""


def test_annotation_is_repeatable():
    message = "[Product: DRX-900] [Interest: Imaging] - urgent"
    assert annotate_message(message) == annotate_message(message)


def test_reannotating_clean_message_loses_tags():
    cleaned = annotate_message("[Product: X] [Interest: Imaging] body")["clean_message"]
    again = annotate_message(cleaned)
    assert again["target_product"] is None
    assert again["interest"] == "General"


def test_compose_with_product():
    message = compose_rfq_message("Need 5 units", "Imaging & Radiology", "DRX-900")
    assert message == "[Product: DRX-900] [Interest: Imaging & Radiology] - Need 5 units"
    result = annotate_message(message)
    assert result["target_product"] == "DRX-900"
    assert result["interest"] == "Imaging & Radiology"


def test_compose_without_product():
    message = compose_rfq_message("Need 5 units", "Dental")
    assert message == "[Interest: Dental] - Need 5 units"
    assert annotate_message(message)["clean_message"] == "Need 5 units"


def test_tag_value_drops_brackets():
    assert tag_value(" DRX]-900 [beta] ") == "DRX-900 beta"
    assert tag_value(None) == ""


def test_compose_strips_brackets_from_product():
    message = compose_rfq_message("quote", "Dental", "Chair] extra")
    assert message == "[Product: Chair extra] [Interest: Dental] - quote"
    result = annotate_message(message)
    assert result["target_product"] == "Chair extra"
    assert result["tag_warnings"] == []
