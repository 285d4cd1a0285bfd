from __future__ import annotations

from fin_browser.data.taxonomy import CATEGORIES, SUB_CATEGORIES, all_sub_categories, sub_categories_for


def test_every_category_has_sub_categories():
    assert set(SUB_CATEGORIES) == set(CATEGORIES)
    assert all(SUB_CATEGORIES[c] for c in CATEGORIES)


def test_sub_categories_for():
    cat = CATEGORIES[1]
    assert sub_categories_for(cat) == SUB_CATEGORIES[cat]
    assert sub_categories_for("") == all_sub_categories()
    assert sub_categories_for("all") == all_sub_categories()
    assert sub_categories_for("unknown") == []


def test_all_sub_categories_in_category_order():
    subs = all_sub_categories()
    assert subs[0] == SUB_CATEGORIES[CATEGORIES[0]][0]
    assert len(subs) == sum(len(v) for v in SUB_CATEGORIES.values())
