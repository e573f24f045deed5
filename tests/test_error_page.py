from hosted_login import render_error_page


def test_contains_message_url_and_status():
    page = render_error_page("bad token", "https://auth.example.com/identity/x", 404)
    assert page.startswith("<!DOCTYPE html>")
    assert "bad token" in page
    assert "https://auth.example.com/identity/x" in page
    assert "Status: 404" in page


def test_escapes_values():
    page = render_error_page("<script>alert(1)</script>", "https://e/?a=1&b=<2>", 400)
    assert "<script>alert(1)</script>" not in page
    assert "&lt;script&gt;" in page
    assert "a=1&amp;b=&lt;2&gt;" in page


def test_one_paragraph_per_line():
    page = render_error_page("first\nsecond", "u", 422)
    assert page.count('<p class="message">') == 2
