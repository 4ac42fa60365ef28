import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, func, select

from polyglot.core.exceptions import ResourceNotFoundError, StorageError, ValidationError
from polyglot.tags import TagTranslation
from polyglot.translations import (
    Translation,
    TranslationCreate,
    TranslationFilters,
    TranslationUpdate,
    create_translation,
    delete_translation,
    get_translation,
    get_translations,
    get_translations_by_key,
    sync_tags,
    update_translation,
)
from polyglot.translations import crud
from tests.factories import make_language, make_languages, make_tag, make_translation


def row_counts(session: Session) -> tuple[int, int]:
    translations = session.exec(select(func.count()).select_from(Translation)).one()
    links = session.exec(select(func.count()).select_from(TagTranslation)).one()
    return translations, links


def tag_ids_of(session: Session, translation_id: int) -> set[int]:
    translation = get_translation(session=session, translation_id=translation_id)
    return {tag.id for tag in translation.tags}


class TestCreateTranslation:
    def test_round_trip_keeps_fields_and_tag_set(self, session):
        english = make_language(session, "en")
        web, mobile = make_tag(session, "web"), make_tag(session, "mobile")

        created = create_translation(
            session=session,
            translation_in=TranslationCreate(
                key="welcome.header.1",
                value="Welcome!",
                language_id=english.id,
                group="frontend",
                tags=[mobile.id, web.id],
            ),
        )
        fetched = get_translation(session=session, translation_id=created.id)

        assert (fetched.key, fetched.value, fetched.language_id, fetched.group) == (
            "welcome.header.1",
            "Welcome!",
            english.id,
            "frontend",
        )
        assert {tag.id for tag in fetched.tags} == {web.id, mobile.id}
        assert fetched.language.code == "en"

    def test_group_defaults_to_general(self, session):
        english = make_language(session, "en")

        created = create_translation(
            session=session,
            translation_in=TranslationCreate(
                key="app.name", value="Polyglot", language_id=english.id
            ),
        )

        assert created.group == "general"
        assert created.tags == []

    def test_unknown_language_persists_nothing(self, session):
        make_language(session, "en")
        before = row_counts(session)

        with pytest.raises(ValidationError) as exc_info:
            create_translation(
                session=session,
                translation_in=TranslationCreate(
                    key="app.name", value="Polyglot", language_id=99999
                ),
            )

        assert exc_info.value.errors == {
            "language_id": ["The selected language is invalid."]
        }
        assert row_counts(session) == before

    def test_unknown_tag_fails_whole_create(self, session):
        english = make_language(session, "en")
        tag = make_tag(session, "web")
        before = row_counts(session)

        with pytest.raises(ValidationError) as exc_info:
            create_translation(
                session=session,
                translation_in=TranslationCreate(
                    key="app.name",
                    value="Polyglot",
                    language_id=english.id,
                    tags=[tag.id, 99999],
                ),
            )

        assert exc_info.value.errors == {
            "tags.1": ["One or more selected tags are invalid."]
        }
        assert row_counts(session) == before

    def test_storage_failure_while_tagging_rolls_back_the_row(
        self, session, monkeypatch
    ):
        english = make_language(session, "en")
        tag = make_tag(session, "web")
        before = row_counts(session)

        def failing_attach(**kwargs):
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(crud, "attach_tags", failing_attach)

        with pytest.raises(StorageError):
            create_translation(
                session=session,
                translation_in=TranslationCreate(
                    key="app.name",
                    value="Polyglot",
                    language_id=english.id,
                    tags=[tag.id],
                ),
            )

        assert row_counts(session) == before

    def test_duplicate_tag_ids_attach_once(self, session):
        english = make_language(session, "en")
        tag = make_tag(session, "web")

        created = create_translation(
            session=session,
            translation_in=TranslationCreate(
                key="app.name",
                value="Polyglot",
                language_id=english.id,
                tags=[tag.id, tag.id],
            ),
        )

        assert [t.id for t in created.tags] == [tag.id]

    def test_same_key_language_and_group_may_repeat(self, session):
        english = make_language(session, "en")
        payload = TranslationCreate(key="dup", value="one", language_id=english.id)

        first = create_translation(session=session, translation_in=payload)
        second = create_translation(session=session, translation_in=payload)

        assert first.id != second.id


class TestUpdateTranslation:
    def test_partial_update_changes_only_value(self, session):
        english = make_language(session, "en")
        tag = make_tag(session, "web")
        translation = make_translation(
            session, english, key="welcome", value="Hi", group="frontend", tags=[tag]
        )

        updated = update_translation(
            session=session,
            translation_id=translation.id,
            translation_in=TranslationUpdate(value="Hello"),
        )

        assert updated.value == "Hello"
        assert (updated.key, updated.language_id, updated.group) == (
            "welcome",
            english.id,
            "frontend",
        )
        assert [t.id for t in updated.tags] == [tag.id]

    def test_empty_tag_list_detaches_everything(self, session):
        english = make_language(session, "en")
        tags = [make_tag(session, "web"), make_tag(session, "mobile")]
        translation = make_translation(session, english, tags=tags)

        update_translation(
            session=session,
            translation_id=translation.id,
            translation_in=TranslationUpdate(tags=[]),
        )

        assert tag_ids_of(session, translation.id) == set()
        assert row_counts(session)[1] == 0

    def test_tag_list_replaces_previous_set(self, session):
        english = make_language(session, "en")
        web, mobile, admin = (make_tag(session, n) for n in ("web", "mobile", "admin"))
        translation = make_translation(session, english, tags=[web, mobile])

        update_translation(
            session=session,
            translation_id=translation.id,
            translation_in=TranslationUpdate(tags=[mobile.id, admin.id]),
        )

        assert tag_ids_of(session, translation.id) == {mobile.id, admin.id}

    def test_moving_to_another_language(self, session):
        english, spanish = make_languages(session, ("en", "es"))
        translation = make_translation(session, english)

        updated = update_translation(
            session=session,
            translation_id=translation.id,
            translation_in=TranslationUpdate(language_id=spanish.id),
        )

        assert updated.language.code == "es"

    def test_unknown_tag_leaves_translation_untouched(self, session):
        english = make_language(session, "en")
        tag = make_tag(session, "web")
        translation = make_translation(session, english, value="Hi", tags=[tag])

        with pytest.raises(ValidationError):
            update_translation(
                session=session,
                translation_id=translation.id,
                translation_in=TranslationUpdate(value="Hello", tags=[99999]),
            )

        reloaded = get_translation(session=session, translation_id=translation.id)
        assert reloaded.value == "Hi"
        assert [t.id for t in reloaded.tags] == [tag.id]

    def test_empty_strings_overwrite_stored_values(self, session):
        english = make_language(session, "en")
        translation = make_translation(session, english, value="Hi", group="frontend")

        updated = update_translation(
            session=session,
            translation_id=translation.id,
            translation_in=TranslationUpdate(value="", group=""),
        )

        assert (updated.value, updated.group) == ("", "")
        reloaded = get_translation(session=session, translation_id=translation.id)
        assert reloaded.value == ""

    def test_explicit_null_is_rejected_for_required_fields(self, session):
        english = make_language(session, "en")
        translation = make_translation(session, english)

        with pytest.raises(ValidationError) as exc_info:
            update_translation(
                session=session,
                translation_id=translation.id,
                translation_in=TranslationUpdate.model_validate(
                    {"key": None, "tags": None}
                ),
            )

        assert set(exc_info.value.errors) == {"key", "tags"}

    def test_unknown_translation(self, session):
        with pytest.raises(ResourceNotFoundError):
            update_translation(
                session=session,
                translation_id=404,
                translation_in=TranslationUpdate(value="x"),
            )


def test_sync_tags_reports_attached_and_detached(session):
    english = make_language(session, "en")
    web, mobile, admin = (make_tag(session, n) for n in ("web", "mobile", "admin"))
    translation = make_translation(session, english, tags=[web, mobile])

    attached, detached = sync_tags(
        session=session, translation_id=translation.id, tag_ids=[mobile.id, admin.id]
    )
    session.commit()

    assert attached == [admin.id]
    assert detached == [web.id]


def test_delete_translation_removes_row_and_links(session):
    english = make_language(session, "en")
    tag = make_tag(session, "web")
    translation_id = make_translation(session, english, tags=[tag]).id

    delete_translation(session=session, translation_id=translation_id)

    assert row_counts(session) == (0, 0)
    with pytest.raises(ResourceNotFoundError):
        get_translation(session=session, translation_id=translation_id)
    with pytest.raises(ResourceNotFoundError):
        delete_translation(session=session, translation_id=translation_id)


class TestListTranslations:
    def test_pagination_meta_and_clamping(self, session):
        english = make_language(session, "en")
        session.add_all(
            Translation(key=f"key.{i}", value=str(i), language_id=english.id)
            for i in range(120)
        )
        session.commit()

        first_page, meta = get_translations(session=session, per_page=50)
        assert len(first_page) == 50
        assert (meta.current_page, meta.last_page, meta.per_page, meta.total) == (
            1,
            3,
            50,
            120,
        )

        last_page, meta = get_translations(session=session, per_page=50, page=3)
        assert len(last_page) == 20
        assert meta.current_page == 3

        clamped, meta = get_translations(session=session, per_page=500)
        assert meta.per_page == 100
        assert len(clamped) == 100

        _, meta = get_translations(session=session, per_page=0, page=-2)
        assert (meta.per_page, meta.current_page) == (1, 1)

    def test_defaults_and_stable_order(self, session):
        english = make_language(session, "en")
        ids = [make_translation(session, english, key=f"k{i}").id for i in range(3)]

        translations, meta = get_translations(session=session)

        assert [t.id for t in translations] == ids
        assert (meta.per_page, meta.current_page, meta.last_page) == (50, 1, 1)

    def test_filters_combine(self, session):
        english, spanish = make_languages(session, ("en", "es"))
        web, mobile = make_tag(session, "web"), make_tag(session, "mobile")
        wanted = make_translation(
            session, english, key="welcome.header.1", group="frontend", tags=[web]
        )
        # each of these misses exactly one filter
        make_translation(
            session, english, key="welcome.header.2", group="emails", tags=[web]
        )
        make_translation(
            session, spanish, key="welcome.header.1", group="frontend", tags=[web]
        )
        make_translation(
            session, english, key="welcome.footer", group="frontend", tags=[mobile]
        )
        make_translation(
            session, english, key="goodbye.header", group="frontend", tags=[web]
        )

        translations, meta = get_translations(
            session=session,
            filters=TranslationFilters(
                language="en", group="frontend", tag="web", key="welcome"
            ),
        )

        assert [t.id for t in translations] == [wanted.id]
        assert meta.total == 1

    def test_key_filter_is_a_case_sensitive_substring(self, session):
        english = make_language(session, "en")
        welcome = make_translation(session, english, key="welcome.header.1")
        make_translation(session, english, key="goodbye.footer.2")
        make_translation(session, english, key="Welcome.banner")

        translations, _ = get_translations(
            session=session, filters=TranslationFilters(key="welcome")
        )

        assert [t.id for t in translations] == [welcome.id]

    def test_tag_filter_is_existential(self, session):
        english = make_language(session, "en")
        web, mobile = make_tag(session, "web"), make_tag(session, "mobile")
        both = make_translation(session, english, key="a", tags=[web, mobile])
        make_translation(session, english, key="b", tags=[web])

        translations, meta = get_translations(
            session=session, filters=TranslationFilters(tag="mobile")
        )

        assert [t.id for t in translations] == [both.id]
        assert meta.total == 1


def test_find_by_key_returns_one_entry_per_language(session):
    english, spanish, french = make_languages(session, ("en", "es", "fr"))
    for language in (english, spanish, french):
        make_translation(session, language, key="welcome.header.1", group="frontend")
    make_translation(session, english, key="welcome.header.10")
    make_translation(session, spanish, key="welcome.header.1", group="emails")

    everywhere = get_translations_by_key(session=session, key="welcome.header.1")
    frontend = get_translations_by_key(
        session=session, key="welcome.header.1", group="frontend"
    )

    assert len(everywhere) == 4
    assert [t.language.code for t in frontend] == ["en", "es", "fr"]
    assert frontend[0].language.name == "English"
