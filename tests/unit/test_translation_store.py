import pytest
from sqlmodel import Session, select

from translation_catalog.core.exceptions import ResourceExistsError, ResourceNotFoundError
from translation_catalog.tags import TranslationTag
from translation_catalog.translations import (
    PAGE_SIZE,
    Translation,
    TranslationCreate,
    TranslationFilters,
    TranslationUpdate,
    build_translation_conditions,
    create_translation,
    delete_translation,
    export_translations,
    get_translation,
    list_translations,
    normalize_tag_names,
    update_translation,
)
from translation_catalog.translations import crud as translations_crud


def _tag_names(translation) -> list[str]:
    return sorted(tag.name for tag in translation.tags)


# --- create / get ---------------------------------------------------------


def test_create_translation_attaches_known_tags(
    session: Session, make_locale, make_tag
) -> None:
    locale = make_locale("en")
    make_tag("web")
    make_tag("mobile")

    created = create_translation(
        session=session,
        translation_in=TranslationCreate(
            locale_id=locale.id,
            key="greeting",
            value="Hello",
            tags=["web", "mobile", "pager"],
        ),
    )

    assert created.key == "greeting"
    assert created.locale.code == "en"
    assert _tag_names(created) == ["mobile", "web"]


def test_create_translation_unknown_locale_inserts_nothing(session: Session) -> None:
    with pytest.raises(ResourceNotFoundError) as exc_info:
        create_translation(
            session=session,
            translation_in=TranslationCreate(locale_id=404, key="k", value="v"),
        )

    assert exc_info.value.error_code == "LOCALE_NOT_FOUND"
    assert session.exec(select(Translation)).all() == []


def test_create_translation_duplicate_key_in_locale(
    session: Session, make_locale, make_translation
) -> None:
    en = make_locale("en")
    fr = make_locale("fr")
    make_translation(en, "greeting", "Hello")

    with pytest.raises(ResourceExistsError) as exc_info:
        create_translation(
            session=session,
            translation_in=TranslationCreate(locale_id=en.id, key="greeting", value="Hi"),
        )
    assert exc_info.value.error_code == "TRANSLATION_EXISTS"

    other = create_translation(
        session=session,
        translation_in=TranslationCreate(locale_id=fr.id, key="greeting", value="Bonjour"),
    )
    assert other.locale.code == "fr"


def test_create_translation_rolls_back_when_tagging_fails(
    session: Session, make_locale, make_tag, monkeypatch
) -> None:
    locale = make_locale("en")
    make_tag("web")

    def _fail(*args, **kwargs):
        raise RuntimeError("tag lookup failed")

    monkeypatch.setattr(translations_crud, "_resolve_tags", _fail)

    with pytest.raises(RuntimeError):
        create_translation(
            session=session,
            translation_in=TranslationCreate(
                locale_id=locale.id, key="k", value="v", tags=["web"]
            ),
        )

    assert session.exec(select(Translation)).all() == []


def test_create_translation_conflict_caught_by_unique_constraint(
    session: Session, make_locale, make_translation, monkeypatch
) -> None:
    locale = make_locale("en")
    make_translation(locale, "greeting", "Hello")
    monkeypatch.setattr(translations_crud, "_ensure_key_available", lambda *a, **kw: None)

    with pytest.raises(ResourceExistsError) as exc_info:
        create_translation(
            session=session,
            translation_in=TranslationCreate(locale_id=locale.id, key="greeting", value="Hi"),
        )

    assert exc_info.value.error_code == "TRANSLATION_EXISTS"
    assert [row.value for row in session.exec(select(Translation)).all()] == ["Hello"]

    created = create_translation(
        session=session,
        translation_in=TranslationCreate(locale_id=locale.id, key="farewell", value="Bye"),
    )
    assert created.key == "farewell"


def test_get_translation_includes_locale_and_tags(
    session: Session, make_locale, make_tag, make_translation
) -> None:
    locale = make_locale("en", "English")
    translation = make_translation(locale, "hi", "Hello", tags=[make_tag("greeting")])

    found = get_translation(session=session, translation_id=translation.id)

    assert found.id == translation.id
    assert found.locale.name == "English"
    assert [tag.name for tag in found.tags] == ["greeting"]


def test_get_translation_missing(session: Session) -> None:
    with pytest.raises(ResourceNotFoundError, match="Translation not found: 7"):
        get_translation(session=session, translation_id=7)


# --- update ---------------------------------------------------------------


def test_update_value_only_keeps_tags(
    session: Session, make_locale, make_tag, make_translation
) -> None:
    locale = make_locale("en")
    translation = make_translation(locale, "hi", "Hello", tags=[make_tag("web")])

    updated = update_translation(
        session=session,
        translation_id=translation.id,
        translation_in=TranslationUpdate(value="Hello there"),
    )

    assert updated.key == "hi"
    assert updated.value == "Hello there"
    assert _tag_names(updated) == ["web"]
    assert updated.updated_at >= updated.created_at


def test_update_tags_replaces_previous_set(
    session: Session, make_locale, make_tag, make_translation
) -> None:
    locale = make_locale("en")
    a, b = make_tag("a"), make_tag("b")
    make_tag("c")
    make_tag("d")
    translation = make_translation(locale, "hi", "Hello", tags=[a, b])

    updated = update_translation(
        session=session,
        translation_id=translation.id,
        translation_in=TranslationUpdate(tags=["b", "c", "d"]),
    )

    assert _tag_names(updated) == ["b", "c", "d"]
    links = session.exec(
        select(TranslationTag).where(TranslationTag.translation_id == translation.id)
    ).all()
    assert len(links) == 3


def test_update_with_empty_tags_detaches_all(
    session: Session, make_locale, make_tag, make_translation
) -> None:
    locale = make_locale("en")
    translation = make_translation(locale, "hi", "Hello", tags=[make_tag("web")])

    updated = update_translation(
        session=session,
        translation_id=translation.id,
        translation_in=TranslationUpdate(tags=[]),
    )

    assert updated.tags == []


def test_update_moves_translation_to_other_locale(
    session: Session, make_locale, make_translation
) -> None:
    en = make_locale("en")
    fr = make_locale("fr")
    translation = make_translation(en, "hi", "Hello")

    updated = update_translation(
        session=session,
        translation_id=translation.id,
        translation_in=TranslationUpdate(locale_id=fr.id, value="Salut"),
    )

    assert updated.locale_id == fr.id
    assert updated.locale.code == "fr"


def test_update_unknown_locale(session: Session, make_locale, make_translation) -> None:
    translation = make_translation(make_locale("en"), "hi", "Hello")

    with pytest.raises(ResourceNotFoundError) as exc_info:
        update_translation(
            session=session,
            translation_id=translation.id,
            translation_in=TranslationUpdate(locale_id=999),
        )
    assert exc_info.value.error_code == "LOCALE_NOT_FOUND"


def test_update_key_conflict(session: Session, make_locale, make_translation) -> None:
    locale = make_locale("en")
    make_translation(locale, "hi", "Hello")
    other = make_translation(locale, "bye", "Goodbye")

    with pytest.raises(ResourceExistsError):
        update_translation(
            session=session,
            translation_id=other.id,
            translation_in=TranslationUpdate(key="hi"),
        )


def test_update_key_conflict_caught_by_unique_constraint(
    session: Session, make_locale, make_translation, monkeypatch
) -> None:
    locale = make_locale("en")
    make_translation(locale, "hi", "Hello")
    other = make_translation(locale, "bye", "Goodbye")
    monkeypatch.setattr(translations_crud, "_ensure_key_available", lambda *a, **kw: None)

    with pytest.raises(ResourceExistsError) as exc_info:
        update_translation(
            session=session,
            translation_id=other.id,
            translation_in=TranslationUpdate(key="hi", value="Hi again"),
        )

    assert exc_info.value.error_code == "TRANSLATION_EXISTS"
    unchanged = get_translation(session=session, translation_id=other.id)
    assert (unchanged.key, unchanged.value) == ("bye", "Goodbye")


def test_update_same_key_is_not_a_conflict(
    session: Session, make_locale, make_translation
) -> None:
    locale = make_locale("en")
    translation = make_translation(locale, "hi", "Hello")

    updated = update_translation(
        session=session,
        translation_id=translation.id,
        translation_in=TranslationUpdate(key="hi", locale_id=locale.id, value="Hey"),
    )

    assert updated.value == "Hey"


def test_update_missing_translation(session: Session) -> None:
    with pytest.raises(ResourceNotFoundError):
        update_translation(
            session=session,
            translation_id=1,
            translation_in=TranslationUpdate(value="x"),
        )


# --- delete ---------------------------------------------------------------


def test_delete_removes_row_and_associations(
    session: Session, make_locale, make_tag, make_translation
) -> None:
    locale = make_locale("en")
    translation = make_translation(
        locale, "hi", "Hello", tags=[make_tag("web"), make_tag("mobile")]
    )
    translation_id = translation.id

    delete_translation(session=session, translation_id=translation_id)

    with pytest.raises(ResourceNotFoundError):
        get_translation(session=session, translation_id=translation_id)
    links = session.exec(
        select(TranslationTag).where(TranslationTag.translation_id == translation_id)
    ).all()
    assert links == []


def test_delete_missing_translation(session: Session) -> None:
    with pytest.raises(ResourceNotFoundError):
        delete_translation(session=session, translation_id=123)


# --- listing --------------------------------------------------------------


def test_normalize_tag_names() -> None:
    assert normalize_tag_names(None) == []
    assert normalize_tag_names([" web", "", "  ", "mobile", "web "]) == ["web", "mobile"]


def test_build_conditions_skips_empty_filters() -> None:
    assert build_translation_conditions(TranslationFilters()) == []
    assert build_translation_conditions(TranslationFilters(key="", tags=[" "])) == []
    assert len(build_translation_conditions(TranslationFilters(key="a", value="b", tags=["c"]))) == 3


def test_list_without_filters_orders_by_id(
    session: Session, make_locale, make_translation
) -> None:
    locale = make_locale("en")
    for key in ("b", "a", "c"):
        make_translation(locale, key, key.upper())

    page = list_translations(session=session, filters=TranslationFilters())

    assert [item.key for item in page.data] == ["b", "a", "c"]
    assert page.page == 1
    assert page.per_page == PAGE_SIZE
    assert page.has_more is False


def test_list_filters_by_key_and_value_substring(
    session: Session, make_locale, make_translation
) -> None:
    locale = make_locale("en")
    make_translation(locale, "home.title", "Welcome home")
    make_translation(locale, "home.subtitle", "Nice to see you")
    make_translation(locale, "login.title", "Sign in")

    by_key = list_translations(session=session, filters=TranslationFilters(key="home"))
    assert [item.key for item in by_key.data] == ["home.title", "home.subtitle"]

    both = list_translations(
        session=session, filters=TranslationFilters(key="title", value="Welcome")
    )
    assert [item.key for item in both.data] == ["home.title"]


def test_list_substring_filters_are_case_sensitive(
    session: Session, make_locale, make_translation
) -> None:
    locale = make_locale("en")
    make_translation(locale, "home", "Welcome")

    upper_key = TranslationFilters(key="HOME")
    lower_value = TranslationFilters(value="welcome")
    assert list_translations(session=session, filters=upper_key).data == []
    assert list_translations(session=session, filters=lower_value).data == []

    page = list_translations(
        session=session, filters=TranslationFilters(key="hom", value="Wel")
    )
    assert [item.key for item in page.data] == ["home"]


def test_list_key_filter_treats_wildcards_literally(
    session: Session, make_locale, make_translation
) -> None:
    locale = make_locale("en")
    make_translation(locale, "discount_50%", "Half off")
    make_translation(locale, "discount_500", "Big discount")

    page = list_translations(session=session, filters=TranslationFilters(key="50%"))

    assert [item.key for item in page.data] == ["discount_50%"]


def test_list_filters_by_tags(
    session: Session, make_locale, make_tag, make_translation
) -> None:
    locale = make_locale("en")
    web, mobile = make_tag("web"), make_tag("mobile")
    make_translation(locale, "a", "A", tags=[web])
    make_translation(locale, "b", "B", tags=[mobile])
    make_translation(locale, "c", "C")

    page = list_translations(session=session, filters=TranslationFilters(tags=["web"]))

    assert [item.key for item in page.data] == ["a"]
    assert [tag.name for tag in page.data[0].tags] == ["web"]


def test_list_with_several_matching_tags_returns_each_translation_once(
    session: Session, make_locale, make_tag, make_translation
) -> None:
    locale = make_locale("en")
    a, b = make_tag("a"), make_tag("b")
    for index in range(PAGE_SIZE + 2):
        make_translation(locale, f"key_{index:02d}", "value", tags=[a, b])

    first = list_translations(session=session, filters=TranslationFilters(tags=["a", "b"]))
    second = list_translations(
        session=session, filters=TranslationFilters(tags=["a", "b"]), page=2
    )

    first_ids = [item.id for item in first.data]
    assert len(first_ids) == PAGE_SIZE
    assert len(set(first_ids)) == PAGE_SIZE
    assert first.has_more is True
    assert [item.key for item in second.data] == ["key_10", "key_11"]
    assert second.has_more is False
    assert all(_tag_names(item) == ["a", "b"] for item in first.data)


# --- export ---------------------------------------------------------------


def test_export_example(
    session: Session, make_locale, make_tag, make_translation
) -> None:
    en = make_locale("en")
    make_translation(en, "hi", "Hello", tags=[make_tag("greeting")])
    expected = [{"key": "hi", "value": "Hello", "tags": ["greeting"]}]

    def _export(tags):
        rows = export_translations(session=session, locale_code="en", tags=tags)
        return [row.model_dump() for row in rows]

    assert _export([]) == expected
    assert _export(["greeting"]) == expected
    assert _export(["farewell"]) == []


def test_export_lists_only_tags_matching_the_filter(
    session: Session, make_locale, make_tag, make_translation
) -> None:
    en = make_locale("en")
    web, mobile, desktop = make_tag("web"), make_tag("mobile"), make_tag("desktop")
    make_translation(en, "hi", "Hello", tags=[web, mobile, desktop])

    unfiltered = export_translations(session=session, locale_code="en")
    filtered = export_translations(
        session=session, locale_code="en", tags=["web", "desktop"]
    )

    assert unfiltered[0].tags == ["web", "mobile", "desktop"]
    assert filtered[0].tags == ["web", "desktop"]


def test_export_skips_untagged_translations(
    session: Session, make_locale, make_tag, make_translation
) -> None:
    en = make_locale("en")
    tagged = make_translation(en, "hi", "Hello", tags=[make_tag("web")])
    untagged = make_translation(en, "bye", "Goodbye")

    rows = export_translations(session=session, locale_code="en")

    assert [row.key for row in rows] == ["hi"]
    assert get_translation(session=session, translation_id=untagged.id).key == "bye"
    assert get_translation(session=session, translation_id=tagged.id).key == "hi"


def test_export_is_scoped_to_locale(
    session: Session, make_locale, make_tag, make_translation
) -> None:
    en, fr = make_locale("en"), make_locale("fr")
    web = make_tag("web")
    make_translation(en, "hi", "Hello", tags=[web])
    make_translation(fr, "hi", "Bonjour", tags=[web])

    rows = export_translations(session=session, locale_code="fr")

    assert [(row.key, row.value) for row in rows] == [("hi", "Bonjour")]


def test_export_unknown_locale(session: Session) -> None:
    with pytest.raises(ResourceNotFoundError) as exc_info:
        export_translations(session=session, locale_code="xx")

    assert exc_info.value.error_code == "LOCALE_NOT_FOUND"
