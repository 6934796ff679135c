# server/tests/test_pages.py


def test_launcher_page_renders_groups(client, create_entry):
    create_entry(name="GitHub", url="https://www.github.com", category="Dev")
    create_entry(name="Notes", url="https://notes.example.com")

    response = client.get("/")
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert 'data-testid="category-dev"' in html
    assert 'data-testid="category-uncategorized"' in html
    assert html.index("category-dev") < html.index("category-uncategorized")
    assert "github.com" in html
    assert 'draggable="true">' in html


def test_launcher_page_search_disables_drag(client, create_entry):
    create_entry(name="GitHub", url="https://github.com")
    create_entry(name="Twitter", url="https://x.com")

    html = client.get("/?q=git").get_data(as_text=True)

    assert "GitHub" in html
    assert "<strong>Twitter</strong>" not in html
    assert "Showing 1 of 2 apps" in html
    assert 'draggable="true">' not in html


def test_launcher_page_empty_search_result(client, create_entry):
    create_entry(name="GitHub", url="https://github.com")

    html = client.get("/?q=zzz").get_data(as_text=True)

    assert 'No matches for "zzz"' in html
