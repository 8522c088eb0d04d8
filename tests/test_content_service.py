# tests/test_content_service.py

import pytest

from forum_server.core.content_service import ContentService, parse_node_id
from forum_server.core.errors import Forbidden, NotFound, ParentNotFound, Unauthorized, ValidationError
from forum_server.models.post import Post


def test_create_content_requires_token(service, db):
    with pytest.raises(Unauthorized):
        service.create_content(None, "T", "B")
    with pytest.raises(Unauthorized):
        service.create_content("not-a-token", "T", "B")

    assert db.query(Post).count() == 0


@pytest.mark.parametrize("title, body", [("", "B"), ("T", ""), (None, "B"), ("T", "   ")])
def test_create_content_requires_title_and_body(service, alice_token, title, body):
    with pytest.raises(ValidationError):
        service.create_content(alice_token, title, body)


def test_post_appears_in_listing(service, alice_token):
    post_id = service.create_content(alice_token, "T", "B")

    listed = service.list_top_level()

    assert len(listed) == 1
    assert listed[0].id == post_id
    assert listed[0].title == "T"
    assert listed[0].body == "B"
    assert listed[0].author.username == "alice"
    assert listed[0].comments == []


def test_comment_shows_under_post(service, alice_token):
    post_id = service.create_content(alice_token, "T", "B")
    comment_id = service.create_comment(alice_token, post_id, "nice post")

    node = service.get_content_with_comments(post_id)

    assert [c.id for c in node.comments] == [comment_id]
    assert node.comments[0].body == "nice post"


def test_comments_are_not_listed_as_posts(service, alice_token):
    post_id = service.create_content(alice_token, "T", "B")
    service.create_comment(alice_token, post_id, "nice post")

    assert [node.id for node in service.list_top_level()] == [post_id]


def test_create_comment_requires_token(service, alice_token, db):
    post_id = service.create_content(alice_token, "T", "B")
    with pytest.raises(Unauthorized):
        service.create_comment(None, post_id, "hi")
    assert db.query(Post).count() == 1


def test_create_comment_on_missing_parent(service, alice_token, db):
    with pytest.raises(ParentNotFound):
        service.create_comment(alice_token, "0" * 32, "hi")
    assert db.query(Post).count() == 0


def test_create_comment_rejects_bad_input(service, alice_token):
    post_id = service.create_content(alice_token, "T", "B")
    with pytest.raises(ValidationError):
        service.create_comment(alice_token, post_id, "")
    with pytest.raises(ValidationError):
        service.create_comment(alice_token, "not-an-id", "hi")


def test_get_content_missing_and_malformed(service):
    with pytest.raises(NotFound):
        service.get_content_with_comments("0" * 32)
    with pytest.raises(ValidationError):
        service.get_content_with_comments("xyz")


def test_author_can_update_and_delete(service, alice_token):
    post_id = service.create_content(alice_token, "T", "B")

    updated = service.update_content_body(post_id, "edited", alice_token)
    assert updated.body == "edited"
    assert updated.title == "T"

    deleted = service.delete_content(post_id, alice_token)
    assert deleted.id == post_id
    with pytest.raises(NotFound):
        service.get_content_with_comments(post_id)


def test_other_users_cannot_modify(service, codec, credentials, alice_token):
    post_id = service.create_content(alice_token, "T", "B")
    bob = credentials.register("bob", "hunter22")
    bob_token = codec.issue(bob.id, bob.username)

    with pytest.raises(Forbidden):
        service.update_content_body(post_id, "mine now", bob_token)
    with pytest.raises(Forbidden):
        service.delete_content(post_id, bob_token)
    with pytest.raises(Unauthorized):
        service.delete_content(post_id, None)


def test_update_requires_body(service, alice_token):
    post_id = service.create_content(alice_token, "T", "B")
    with pytest.raises(ValidationError):
        service.update_content_body(post_id, "", alice_token)


def test_permissive_mode_allows_anyone(tree, gate, alice_token):
    strict = ContentService(tree, gate)
    post_id = strict.create_content(alice_token, "T", "B")

    permissive = ContentService(tree, gate, require_authorship=False)
    assert permissive.update_content_body(post_id, "edited").body == "edited"
    assert permissive.delete_content(post_id).id == post_id
    with pytest.raises(NotFound):
        permissive.delete_content(post_id)


def test_parse_node_id_normalizes():
    raw = "12345678-1234-5678-1234-567812345678"
    assert parse_node_id(raw) == "12345678123456781234567812345678"
    with pytest.raises(ValidationError):
        parse_node_id("12345")
