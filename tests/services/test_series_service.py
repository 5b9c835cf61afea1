import itertools

from folio.schemas.series import SeriesCta, SeriesDefinition
from folio.services.series_catalog import SeriesCatalog
from folio.services.series_service import (
    SeriesService,
    build_series_context,
    collect_series_from_posts,
    get_series,
    next_in_series,
    order_series_posts,
    part_number_for_post,
    previous_in_series,
    series_navigation,
)
from tests.conftest import FakeFrontMatterService, make_post


def scenario_posts():
    a = make_post("a", date="2024-01-10T00:00:00.000Z", series="s", order=2)
    b = make_post("b", date="2024-01-20T00:00:00.000Z", series="s", order=1)
    c = make_post("c", date="2024-03-01T00:00:00.000Z", series="s")
    return a, b, c


def test_order_series_posts_uses_order_then_unordered_last():
    a, b, c = scenario_posts()

    assert order_series_posts([a, b, c]) == [b, a, c]


def test_ordered_part_comes_before_unordered_part_regardless_of_date():
    first = make_post("first", date="2030-01-01T00:00:00.000Z", series="s", order=1)
    loose = make_post("loose", date="2001-01-01T00:00:00.000Z", series="s")

    assert order_series_posts([loose, first]) == [first, loose]


def test_order_series_posts_breaks_ties_by_date_title_then_slug():
    late = make_post("late", title="A", date="2024-05-01T00:00:00.000Z", series="s")
    early = make_post("early", title="Z", date="2024-01-01T00:00:00.000Z", series="s")
    undated_b = make_post("undated-b", title="B", series="s")
    undated_a = make_post("undated-a", title="A", series="s")
    twin = make_post("twin", title="A", series="s")

    ordered = order_series_posts([undated_b, late, twin, undated_a, early])

    assert [post.slug for post in ordered] == [
        "early",
        "late",
        "twin",
        "undated-a",
        "undated-b",
    ]


def test_order_series_posts_is_deterministic_for_any_input_order():
    a, b, c = scenario_posts()
    d = make_post("d", date="2024-01-15T00:00:00.000Z", series="s", order=2)

    results = {
        tuple(post.slug for post in order_series_posts(list(permutation)))
        for permutation in itertools.permutations([a, b, c, d])
    }

    assert results == {("b", "a", "d", "c")}
    once = order_series_posts([c, d, a, b])
    assert order_series_posts(once) == once


def test_order_series_posts_handles_fractional_orders():
    half = make_post("half", series="s", order=1.5)
    one = make_post("one", series="s", order=1)
    two = make_post("two", series="s", order=2)

    assert [p.slug for p in order_series_posts([two, half, one])] == ["one", "half", "two"]


def test_collect_series_from_posts_empty():
    assert collect_series_from_posts([]) == []


def test_collect_series_from_posts_groups_and_skips_unseried_posts():
    a, b, c = scenario_posts()
    solo = make_post("solo", date="2024-02-01T00:00:00.000Z")
    other = make_post("other", series="another-topic", order=1)

    result = collect_series_from_posts([solo, a, other, c, b])

    assert [item.slug for item in result] == ["another-topic", "s"]
    assert [item.title for item in result] == ["Another Topic", "S"]
    assert [post.slug for post in result[1].posts] == ["b", "a", "c"]
    assert all(post.slug != "solo" for item in result for post in item.posts)


def test_collect_series_from_posts_uses_catalog_definition():
    catalog = SeriesCatalog(
        {
            "remote": SeriesDefinition(
                slug="remote",
                title="Remote Leadership",
                summary="How to lead from afar",
                cta=SeriesCta(label="Subscribe", href="/newsletter"),
            )
        }
    )
    post = make_post("p1", series="remote", order=1)

    [series] = collect_series_from_posts([post], catalog)

    assert series.title == "Remote Leadership"
    assert series.summary == "How to lead from afar"
    assert series.cta.href == "/newsletter"
    assert series.posts == [post]


def test_collect_series_from_posts_sorts_titles_by_code_point():
    catalog = SeriesCatalog({"lower": SeriesDefinition(slug="lower", title="alpha")})
    posts = [
        make_post("p1", series="lower"),
        make_post("p2", series="beta-notes"),
    ]

    result = collect_series_from_posts(posts, catalog)

    assert [item.title for item in result] == ["Beta Notes", "alpha"]


def test_build_series_context_locates_current_post():
    a, b, c = scenario_posts()

    context = build_series_context([a, b, c], "s", "a")

    assert context.currentIndex == 1
    assert context.posts == [b, a, c]
    assert context.meta.title == "S"
    assert previous_in_series(context) == b
    assert next_in_series(context) == c


def test_build_series_context_returns_none_for_unknown_series():
    a, b, c = scenario_posts()

    assert build_series_context([a, b, c], "no-such-series", "any-slug") is None


def test_build_series_context_reports_missing_current_post(caplog):
    a, b, c = scenario_posts()

    context = build_series_context([a, b, c], "s", "elsewhere")

    assert context.currentIndex == -1
    assert previous_in_series(context) is None
    assert next_in_series(context) is None
    assert series_navigation(context) is None
    assert any("elsewhere" in rec.message for rec in caplog.records)


def test_series_edges_have_no_neighbours():
    a, b, c = scenario_posts()

    first = build_series_context([a, b, c], "s", "b")
    last = build_series_context([a, b, c], "s", "c")

    assert previous_in_series(first) is None
    assert next_in_series(first) == a
    assert previous_in_series(last) == a
    assert next_in_series(last) is None
    assert previous_in_series(None) is None


def test_get_series_returns_single_series_or_none():
    a, b, c = scenario_posts()

    series = get_series([a, b, c], "s")

    assert series.slug == "s"
    assert [post.slug for post in series.posts] == ["b", "a", "c"]
    assert get_series([a, b, c], "missing") is None


def test_part_number_mixes_declared_order_and_position():
    ordered = make_post("x", series="s", order=5)
    loose = make_post("y", series="s")

    assert part_number_for_post(ordered, 0) == 5
    assert part_number_for_post(loose, 1) == 2
    assert part_number_for_post(loose, 0) == 1


def test_series_navigation_summarizes_position():
    a, b, c = scenario_posts()
    context = build_series_context([a, b, c], "s", "c")

    navigation = series_navigation(context)

    assert navigation.previous == a
    assert navigation.next is None
    assert navigation.partNumber == 3
    assert navigation.position == 3
    assert navigation.total == 3
    assert series_navigation(None) is None


def test_series_service_reads_posts_from_loader_and_uses_catalog():
    a, b, c = scenario_posts()
    loader = FakeFrontMatterService(posts=[a, b, c])
    catalog = SeriesCatalog({"s": SeriesDefinition(slug="s", title="Series S")})
    service = SeriesService(loader, catalog)

    listed = service.list_series()
    single = service.get_series("s")
    context = service.get_series_context("s", "b")

    assert [item.title for item in listed] == ["Series S"]
    assert single.title == "Series S"
    assert context.currentIndex == 0
    assert loader.calls == [("all", "blog")] * 3
    assert service.get_series_meta("s").title == "Series S"
    assert [item.slug for item in service.list_available_series()] == ["s"]


def test_series_service_context_reuses_given_posts():
    a, b, c = scenario_posts()
    loader = FakeFrontMatterService(posts=[])
    service = SeriesService(loader)

    context = service.get_series_context("s", "a", posts=[a, b, c])

    assert context.currentIndex == 1
    assert loader.calls == []


def test_series_service_accepts_empty_catalog():
    post = make_post("p", series="empathetic-remote-management")
    service = SeriesService(FakeFrontMatterService(posts=[post]), SeriesCatalog({}))

    [series] = service.list_series()

    assert series.title == "Empathetic Remote Management"
    assert series.summary is None
