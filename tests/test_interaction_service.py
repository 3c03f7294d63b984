# tests/test_interaction_service.py
import pytest

from app.core.result import ErrorKind
from app.core.sort_by import SortBy
from app.models.interaction import PhotoFavorite, PhotoLike
from app.models.photo import Photo
from app.repositories.interaction_repository import SqlInteractionStore, favorite_store, like_store
from app.repositories.photo_repository import SqlPhotoStore
from app.services.interaction_service import InteractionLedger

@pytest.fixture
def owner(make_user):
    return make_user(username="owner")

@pytest.fixture
def viewer(make_user):
    return make_user(username="viewer")

# ===== 좋아요 =====

def test_like_then_is_liked(ledger, owner, viewer, make_photo):
    photo = make_photo(owner, is_public=True)

    assert ledger.like(photo.id, viewer.id).ok
    assert ledger.is_liked_by(photo.id, viewer.id).value is True
    assert ledger.like_count(photo.id).value == 1

def test_second_like_is_conflict(ledger, owner, viewer, make_photo):
    photo = make_photo(owner)
    ledger.like(photo.id, viewer.id)

    result = ledger.like(photo.id, viewer.id)
    assert result.error.kind == ErrorKind.CONFLICT
    assert ledger.like_count(photo.id).value == 1

def test_like_missing_photo_is_not_found(ledger, viewer):
    assert ledger.like("no-such-photo", viewer.id).error.kind == ErrorKind.NOT_FOUND

def test_like_private_photo_is_rejected(ledger, owner, viewer, make_photo):
    photo = make_photo(owner, is_public=False)
    result = ledger.like(photo.id, viewer.id)
    assert result.error.kind == ErrorKind.INVALID_OPERATION
    assert "비공개" in result.error.message

def test_like_own_photo_is_rejected(ledger, owner, make_photo):
    photo = make_photo(owner, is_public=True)
    result = ledger.like(photo.id, owner.id)
    assert result.error.kind == ErrorKind.INVALID_OPERATION
    assert "본인" in result.error.message

def test_like_own_photo_rejected_regardless_of_history(ledger, db, owner, make_photo):
    """규칙 우회로 들어간 좋아요가 있어도 본인 좋아요는 거부"""
    photo = make_photo(owner)
    db.add(PhotoLike(photo_id=photo.id, user_id=owner.id))
    db.commit()

    assert ledger.like(photo.id, owner.id).error.kind == ErrorKind.INVALID_OPERATION

def test_own_private_photo_like_reports_privacy_first(ledger, owner, make_photo):
    photo = make_photo(owner, is_public=False)
    result = ledger.like(photo.id, owner.id)
    assert "비공개" in result.error.message

def test_unlike_never_liked_is_invalid(ledger, owner, viewer, make_photo):
    photo = make_photo(owner)
    assert ledger.unlike(photo.id, viewer.id).error.kind == ErrorKind.INVALID_OPERATION

def test_unlike_after_like_restores_state(ledger, owner, viewer, make_photo):
    photo = make_photo(owner)
    ledger.like(photo.id, viewer.id)

    assert ledger.unlike(photo.id, viewer.id).ok
    assert ledger.is_liked_by(photo.id, viewer.id).value is False
    assert ledger.like_count(photo.id).value == 0

def test_unlike_missing_photo_is_not_found(ledger, viewer):
    assert ledger.unlike("no-such-photo", viewer.id).error.kind == ErrorKind.NOT_FOUND

class _BlindStore(SqlInteractionStore):
    """조회로는 중복을 못 보는 상황 (동시 요청 경합)"""

    def exists(self, photo_id, user_id):
        return False

def test_store_level_duplicate_becomes_conflict(db, guard, owner, viewer, make_photo):
    photo = make_photo(owner)
    ledger = InteractionLedger(
        SqlPhotoStore(db), _BlindStore(db, PhotoLike), favorite_store(db), guard
    )

    assert ledger.like(photo.id, viewer.id).ok
    result = ledger.like(photo.id, viewer.id)
    assert result.error.kind == ErrorKind.CONFLICT
    assert ledger.like_count(photo.id).value == 1

class _VanishingPhotoStore(SqlInteractionStore):
    """확인과 삽입 사이에 사진이 지워지는 상황"""

    def add(self, photo_id, user_id):
        self.db.query(Photo).filter(Photo.id == photo_id).delete(synchronize_session=False)
        self.db.commit()
        return super().add(photo_id, user_id)

@pytest.mark.parametrize("model,action", [(PhotoLike, "like"), (PhotoFavorite, "favorite")])
def test_photo_deleted_before_insert_is_not_found(db, guard, owner, viewer, make_photo, model, action):
    photo = make_photo(owner)
    photo_id = photo.id
    stores = {PhotoLike: like_store(db), PhotoFavorite: favorite_store(db)}
    stores[model] = _VanishingPhotoStore(db, model)
    ledger = InteractionLedger(SqlPhotoStore(db), stores[PhotoLike], stores[PhotoFavorite], guard)

    result = getattr(ledger, action)(photo_id, viewer.id)

    assert result.error.kind == ErrorKind.NOT_FOUND
    assert db.query(model).count() == 0

def test_store_add_for_missing_photo_returns_false(db, viewer):
    assert like_store(db).add("no-such-photo", viewer.id) is False

# ===== 즐겨찾기 =====

def test_favorite_own_private_photo(ledger, owner, make_photo):
    photo = make_photo(owner, is_public=False)
    assert ledger.favorite(photo.id, owner.id).ok
    assert ledger.is_favorited_by(photo.id, owner.id).value is True

def test_favorite_own_public_photo(ledger, owner, make_photo):
    photo = make_photo(owner, is_public=True)
    assert ledger.favorite(photo.id, owner.id).ok

def test_favorite_others_private_photo_is_rejected(ledger, owner, viewer, make_photo):
    photo = make_photo(owner, is_public=False)
    result = ledger.favorite(photo.id, viewer.id)
    assert result.error.kind == ErrorKind.INVALID_OPERATION
    assert ledger.is_favorited_by(photo.id, viewer.id).value is False

def test_favorite_others_public_photo(ledger, owner, viewer, make_photo):
    photo = make_photo(owner, is_public=True)
    assert ledger.favorite(photo.id, viewer.id).ok
    assert ledger.favorite_count(photo.id).value == 1

def test_second_favorite_is_conflict(ledger, owner, viewer, make_photo):
    photo = make_photo(owner)
    ledger.favorite(photo.id, viewer.id)
    assert ledger.favorite(photo.id, viewer.id).error.kind == ErrorKind.CONFLICT

def test_store_level_duplicate_favorite_becomes_conflict(db, guard, owner, viewer, make_photo):
    from app.models.interaction import PhotoFavorite
    from app.repositories.interaction_repository import like_store

    photo = make_photo(owner)
    ledger = InteractionLedger(
        SqlPhotoStore(db), like_store(db), _BlindStore(db, PhotoFavorite), guard
    )

    assert ledger.favorite(photo.id, viewer.id).ok
    assert ledger.favorite(photo.id, viewer.id).error.kind == ErrorKind.CONFLICT

def test_unfavorite(ledger, owner, viewer, make_photo):
    photo = make_photo(owner)
    assert ledger.unfavorite(photo.id, viewer.id).error.kind == ErrorKind.INVALID_OPERATION

    ledger.favorite(photo.id, viewer.id)
    assert ledger.unfavorite(photo.id, viewer.id).ok
    assert ledger.is_favorited_by(photo.id, viewer.id).value is False

def test_favorite_missing_photo_is_not_found(ledger, viewer):
    assert ledger.favorite("no-such-photo", viewer.id).error.kind == ErrorKind.NOT_FOUND
    assert ledger.unfavorite("no-such-photo", viewer.id).error.kind == ErrorKind.NOT_FOUND

# ===== 조회 =====

def test_queries_on_missing_photo_are_not_found(ledger, viewer):
    assert ledger.is_liked_by("gone", viewer.id).error.kind == ErrorKind.NOT_FOUND
    assert ledger.is_favorited_by("gone", viewer.id).error.kind == ErrorKind.NOT_FOUND
    assert ledger.like_count("gone").error.kind == ErrorKind.NOT_FOUND

def test_anonymous_is_never_liked(ledger, owner, make_photo):
    photo = make_photo(owner)
    assert ledger.is_liked_by(photo.id, None).value is False
    assert ledger.is_favorited_by(photo.id, None).value is False

def test_counts_for_many_photos(ledger, make_user, owner, make_photo):
    a = make_photo(owner)
    b = make_photo(owner)
    fans = [make_user() for _ in range(3)]
    for fan in fans:
        ledger.like(a.id, fan.id)
    ledger.favorite(b.id, fans[0].id)

    likes, favorites = ledger.counts_for([a.id, b.id])
    assert likes == {a.id: 3}
    assert favorites == {b.id: 1}

def test_liked_photos_sorted_and_paginated(ledger, make_user, owner, viewer, make_photo):
    photos = [make_photo(owner, title=f"p{i}") for i in range(5)]
    for photo in photos:
        ledger.like(photo.id, viewer.id)

    first = ledger.liked_photos_of(viewer.id, "newest", 0, 2).value
    assert [p.title for p in first.items] == ["p4", "p3"]
    assert first.total_items == 5
    assert first.total_pages == 3
    assert first.has_next is True

    last = ledger.liked_photos_of(viewer.id, "newest", 2, 2).value
    assert [p.title for p in last.items] == ["p0"]
    assert last.has_next is False
    assert last.has_previous is True

    oldest = ledger.liked_photos_of(viewer.id, "oldest", 0, 5).value
    assert [p.title for p in oldest.items] == ["p0", "p1", "p2", "p3", "p4"]

def test_liked_photos_most_liked(ledger, make_user, owner, viewer, make_photo):
    quiet = make_photo(owner, title="quiet")
    popular = make_photo(owner, title="popular")
    medium = make_photo(owner, title="medium")
    for photo in (quiet, popular, medium):
        ledger.like(photo.id, viewer.id)
    others = [make_user() for _ in range(2)]
    for fan in others:
        ledger.like(popular.id, fan.id)
    ledger.like(medium.id, others[0].id)

    page = ledger.liked_photos_of(viewer.id, SortBy.MOST_LIKED.value, 0, 10).value
    assert [p.title for p in page.items] == ["popular", "medium", "quiet"]

def test_liked_photos_hide_photos_made_private(db, ledger, owner, viewer, make_photo):
    photo = make_photo(owner)
    ledger.like(photo.id, viewer.id)
    photo.is_public = False
    db.commit()

    page = ledger.liked_photos_of(viewer.id, "newest", 0, 12).value
    assert page.items == []
    assert page.total_items == 0

def test_favorited_photos_include_own_private(ledger, owner, viewer, make_photo):
    mine = make_photo(owner, is_public=False, title="mine")
    theirs = make_photo(viewer, is_public=True, title="theirs")
    ledger.favorite(mine.id, owner.id)
    ledger.favorite(theirs.id, owner.id)

    page = ledger.favorited_photos_of(owner.id, "mostFavorited", 0, 12).value
    assert {p.title for p in page.items} == {"mine", "theirs"}
    assert page.total_items == 2

def test_list_with_unknown_sort_is_validation_error(ledger, viewer):
    assert ledger.liked_photos_of(viewer.id, "hot", 0, 12).error.kind == ErrorKind.VALIDATION
    assert ledger.favorited_photos_of(viewer.id, "hot", 0, 12).error.kind == ErrorKind.VALIDATION

def test_list_with_bad_page_is_validation_error(ledger, viewer):
    assert ledger.liked_photos_of(viewer.id, "newest", -1, 12).error.kind == ErrorKind.VALIDATION

def test_flags_for_marks_only_my_interactions(ledger, make_user, owner, viewer, make_photo):
    liked = make_photo(owner)
    saved = make_photo(owner)
    untouched = make_photo(owner)
    ledger.like(liked.id, viewer.id)
    ledger.favorite(saved.id, viewer.id)
    ledger.like(untouched.id, make_user().id)

    liked_ids, favorited_ids = ledger.flags_for(viewer.id, [liked.id, saved.id, untouched.id])
    assert liked_ids == {liked.id}
    assert favorited_ids == {saved.id}

def test_flags_for_anonymous_is_empty(ledger, owner, viewer, make_photo):
    photo = make_photo(owner)
    ledger.like(photo.id, viewer.id)
    assert ledger.flags_for(None, [photo.id]) == (set(), set())
