"""
Step definitions for quote anchoring and re-anchoring scenarios.
"""

from behave import given, then, when  # type: ignore[import-untyped]

from anchoring.content_hash import compute_content_hash, has_content_changed
from anchoring.selectors import compute_selector, match_quote, reanchor_highlight


# === Document Setup ===


@given('the document "{text}"')  # type: ignore[misc]
def step_given_document(context, text):
    context.document = text


@given("I store the content hash")  # type: ignore[misc]
def step_given_content_hash(context):
    context.stored_hash = compute_content_hash(context.document)


# === Actions ===


@given('I anchor the quote "{quote}"')  # type: ignore[misc]
@when('I anchor the quote "{quote}"')  # type: ignore[misc]
def step_anchor_quote(context, quote):
    context.selector = compute_selector(context.document, quote)


@given('I anchor the quote "{quote}" near offset {offset:d}')  # type: ignore[misc]
def step_anchor_quote_near(context, quote, offset):
    context.selector = compute_selector(context.document, quote, offset)
    assert context.selector is not None, f"Could not anchor '{quote}'"


@when('I match the quote "{quote}"')  # type: ignore[misc]
def step_when_match_quote(context, quote):
    context.match = match_quote(context.document, quote)


@when('the document is edited to "{text}"')  # type: ignore[misc]
def step_when_document_edited(context, text):
    context.document = text


@when("I re-anchor the selector")  # type: ignore[misc]
def step_when_reanchor(context):
    assert context.selector is not None, "No selector to re-anchor"
    context.position = reanchor_highlight(context.document, context.selector)


# === Assertions ===


@then("the selector spans {start:d} to {end:d}")  # type: ignore[misc]
def step_then_selector_spans(context, start, end):
    assert context.selector is not None, "Expected a selector but got none"
    actual = (context.selector.start_offset, context.selector.end_offset)
    assert actual == (start, end), f"Expected ({start}, {end}) but got {actual}"


@then('the selector exact text is "{exact}"')  # type: ignore[misc]
def step_then_selector_exact(context, exact):
    assert context.selector.exact == exact, (
        f"Expected exact '{exact}' but got '{context.selector.exact}'"
    )


@then('the selector prefix is "{prefix}"')  # type: ignore[misc]
def step_then_selector_prefix(context, prefix):
    assert context.selector.prefix == prefix, (
        f"Expected prefix '{prefix}' but got '{context.selector.prefix}'"
    )


@then('the selector suffix is "{suffix}"')  # type: ignore[misc]
def step_then_selector_suffix(context, suffix):
    assert context.selector.suffix == suffix, (
        f"Expected suffix '{suffix}' but got '{context.selector.suffix}'"
    )


@then("no selector is returned")  # type: ignore[misc]
def step_then_no_selector(context):
    assert context.selector is None, f"Expected no selector but got {context.selector}"


@then("a match is found with {errors:d} error")  # type: ignore[misc]
def step_then_match_errors(context, errors):
    assert context.match is not None, "Expected a match but got none"
    assert context.match.errors == errors, (
        f"Expected {errors} error(s) but got {context.match.errors}"
    )


@then("the match score is above {threshold:f}")  # type: ignore[misc]
def step_then_match_score(context, threshold):
    assert context.match.score > threshold, (
        f"Expected score above {threshold} but got {context.match.score}"
    )


@then("the quote is re-anchored at {start:d} to {end:d}")  # type: ignore[misc]
def step_then_reanchored(context, start, end):
    assert context.position is not None, "Expected re-anchoring to succeed"
    actual = (context.position.start_offset, context.position.end_offset)
    assert actual == (start, end), f"Expected ({start}, {end}) but got {actual}"


@then("re-anchoring fails")  # type: ignore[misc]
def step_then_reanchor_fails(context):
    assert context.position is None, f"Expected failure but got {context.position}"


@then("the content has changed")  # type: ignore[misc]
def step_then_content_changed(context):
    assert has_content_changed(context.document, context.stored_hash)
