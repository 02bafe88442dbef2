from autotag.rules.evaluator import ProductForEvaluation, evaluate_product_rules


def test_vendor_match_ignores_case_and_whitespace(rule):
    product = ProductForEvaluation(vendor="Acme ")
    assert evaluate_product_rules(product, [rule("vendor", "eq", "acme", "acme")]) == {"acme"}

    product = ProductForEvaluation(vendor=" acme ")
    assert evaluate_product_rules(product, [rule("vendor", "eq", "Acme", "acme")]) == {"acme"}


def test_vendor_only_supports_eq(rule):
    product = ProductForEvaluation(vendor="Acme")
    rules = [rule("vendor", "gt", "Acme", "a"), rule("vendor", "lt", "Acme", "b")]
    assert evaluate_product_rules(product, rules) == set()


def test_unparsable_numeric_value_never_matches(rule):
    product = ProductForEvaluation(price=50, total_inventory=3)
    rules = [
        rule("price", "gt", "abc", "expensive"),
        rule("inventory", "lt", "five", "low-stock"),
    ]
    assert evaluate_product_rules(product, rules) == set()


def test_unknown_record_field_never_matches(rule):
    product = ProductForEvaluation(price=None, total_inventory=None, vendor=None)
    rules = [
        rule("price", "gt", "10", "expensive"),
        rule("inventory", "lt", "5", "low-stock"),
        rule("vendor", "eq", "acme", "acme"),
    ]
    assert evaluate_product_rules(product, rules) == set()


def test_numeric_operators(rule):
    product = ProductForEvaluation(price=120.0, total_inventory=3)
    rules = [
        rule("price", "gt", "100", "gt-100"),
        rule("price", "lt", "100", "lt-100"),
        rule("price", "eq", "120", "eq-120"),
        rule("inventory", "lt", "5", "low-stock"),
        rule("inventory", "eq", "3", "three-left"),
        rule("inventory", "gt", "3", "plenty"),
    ]
    assert evaluate_product_rules(product, rules) == {"gt-100", "eq-120", "low-stock", "three-left"}


def test_inventory_value_must_be_an_integer(rule):
    product = ProductForEvaluation(total_inventory=3)
    assert evaluate_product_rules(product, [rule("inventory", "lt", "5.5", "low")]) == set()


def test_disabled_rules_are_skipped(rule):
    product = ProductForEvaluation(price=500)
    rules = [rule("price", "gt", "100", "expensive", enabled=False)]
    assert evaluate_product_rules(product, rules) == set()


def test_unknown_field_or_operator_never_matches(rule):
    product = ProductForEvaluation(price=500, vendor="Acme")
    rules = [rule("title", "eq", "Shirt", "shirt"), rule("price", "gte", "100", "expensive")]
    assert evaluate_product_rules(product, rules) == set()


def test_duplicate_tags_collapse(rule):
    product = ProductForEvaluation(price=500, vendor="Acme")
    rules = [rule("price", "gt", "100", "featured"), rule("vendor", "eq", "acme", "featured")]
    assert evaluate_product_rules(product, rules) == {"featured"}


def test_evaluation_is_deterministic(rule):
    product = ProductForEvaluation(price=120, total_inventory=2, vendor="Acme")
    rules = [
        rule("vendor", "eq", "acme", "acme"),
        rule("price", "gt", "100", "expensive"),
        rule("inventory", "lt", "5", "low-stock"),
    ]
    first = evaluate_product_rules(product, rules)
    assert first == evaluate_product_rules(product, list(reversed(rules)))
    assert first == evaluate_product_rules(product, rules)


def test_digit_separators_are_not_numbers(rule):
    product = ProductForEvaluation(price=1000.0, total_inventory=1000)
    rules = [
        rule("price", "eq", "1_000", "thousand"),
        rule("inventory", "eq", "1_000", "thousand-left"),
    ]
    assert evaluate_product_rules(product, rules) == set()


def test_vendor_comparison_lowercases_without_folding(rule):
    product = ProductForEvaluation(vendor="Straße")
    assert evaluate_product_rules(product, [rule("vendor", "eq", "strasse", "street")]) == set()
    assert evaluate_product_rules(product, [rule("vendor", "eq", "STRASSE", "street")]) == set()
    assert evaluate_product_rules(product, [rule("vendor", "eq", "straße", "street")]) == {"street"}
