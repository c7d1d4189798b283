import pytest

from woodys.db import models, schemas
from woodys.errors import NotFoundError, UnauthorizedError, ValidationError


@pytest.fixture
def thread(make_user, make_project):
    owner = make_user()
    commenter = make_user()
    project = make_project(owner)
    return owner, commenter, project


def test_create_comment(services, thread):
    owner, commenter, project = thread
    comment = services.comments.create_comment(project.id, schemas.CommentCreate(content="Great dovetails", rating=5), commenter.id)
    assert comment.user_id == commenter.id
    assert comment.project_id == project.id
    assert comment.parent_comment_id is None
    assert comment.rating == 5
    assert not comment.is_deleted


def test_create_comment_errors(services, thread):
    owner, commenter, project = thread
    with pytest.raises(UnauthorizedError):
        services.comments.create_comment(project.id, schemas.CommentCreate(content="hi"), None)
    with pytest.raises(NotFoundError):
        services.comments.create_comment(9999, schemas.CommentCreate(content="hi"), commenter.id)
    with pytest.raises(ValidationError) as exc:
        services.comments.create_comment(project.id, schemas.CommentCreate(content="   "), commenter.id)
    assert exc.value.field == "content"
    with pytest.raises(ValidationError) as exc:
        services.comments.create_comment(project.id, schemas.CommentCreate(content="ok", rating=9), commenter.id)
    assert exc.value.field == "rating"


def test_reply_inherits_project(services, thread):
    owner, commenter, project = thread
    parent = services.comments.create_comment(project.id, schemas.CommentCreate(content="Which finish?"), commenter.id)
    reply = services.comments.create_reply(parent.id, schemas.CommentCreate(content="Danish oil"), owner.id)
    assert reply.project_id == project.id
    assert reply.parent_comment_id == parent.id
    assert reply.is_reply

    with pytest.raises(NotFoundError) as exc:
        services.comments.create_reply(9999, schemas.CommentCreate(content="?"), owner.id)
    assert str(exc.value).startswith("parent comment")


def test_edit_rules(services, thread):
    owner, commenter, project = thread
    comment = services.comments.create_comment(project.id, schemas.CommentCreate(content="First"), commenter.id)
    with pytest.raises(UnauthorizedError) as exc:
        services.comments.update_comment(comment.id, schemas.CommentUpdate(content="Hijack"), owner.id)
    assert "only the author" in str(exc.value)

    edited = services.comments.update_comment(comment.id, schemas.CommentUpdate(content="Edited"), commenter.id)
    assert edited.content == "Edited"

    services.comments.delete_comment(comment.id, commenter.id)
    with pytest.raises(UnauthorizedError) as exc:
        services.comments.update_comment(comment.id, schemas.CommentUpdate(content="Back again"), commenter.id)
    assert "deleted comments" in str(exc.value)


def test_soft_delete_keeps_row_and_replies(services, thread):
    owner, commenter, project = thread
    parent = services.comments.create_comment(project.id, schemas.CommentCreate(content="Parent", rating=4), commenter.id)
    reply = services.comments.create_reply(parent.id, schemas.CommentCreate(content="Child"), owner.id)

    with pytest.raises(UnauthorizedError):
        services.comments.delete_comment(parent.id, owner.id)

    deleted = services.comments.delete_comment(parent.id, commenter.id)
    assert deleted.is_deleted
    assert deleted.content == models.DELETED_COMMENT_CONTENT
    assert deleted.rating == 4

    # still retrievable by id, replies still reachable
    assert services.comments.get_comment(parent.id).is_deleted
    assert [r.id for r in services.comments.get_comment_replies(parent.id)] == [reply.id]

    # deleted top-level comments drop out of the project listing
    assert services.comments.get_project_comments(project.id) == []
    assert services.comments.count_project_comments(project.id) == 1

    # deleting again is a no-op
    again = services.comments.delete_comment(parent.id, commenter.id)
    assert again.content == models.DELETED_COMMENT_CONTENT


def test_reply_to_deleted_parent_is_allowed(services, thread):
    owner, commenter, project = thread
    parent = services.comments.create_comment(project.id, schemas.CommentCreate(content="Parent"), commenter.id)
    services.comments.delete_comment(parent.id, commenter.id)
    reply = services.comments.create_reply(parent.id, schemas.CommentCreate(content="Late reply"), owner.id)
    assert reply.parent_comment_id == parent.id


def test_project_comments_threading(services, thread):
    owner, commenter, project = thread
    first = services.comments.create_comment(project.id, schemas.CommentCreate(content="First"), commenter.id)
    second = services.comments.create_comment(project.id, schemas.CommentCreate(content="Second"), owner.id)
    r1 = services.comments.create_reply(first.id, schemas.CommentCreate(content="Reply one"), owner.id)
    r2 = services.comments.create_reply(first.id, schemas.CommentCreate(content="Reply two"), commenter.id)
    r3 = services.comments.create_reply(first.id, schemas.CommentCreate(content="Reply three"), owner.id)
    services.comments.delete_comment(r3.id, owner.id)

    listing = services.comments.get_project_comments(project.id)
    assert [c.id for c in listing] == [second.id, first.id]
    by_id = {c.id: c for c in listing}
    assert by_id[first.id].reply_count == 2
    assert [r.id for r in by_id[first.id].replies] == [r1.id, r2.id]
    assert by_id[first.id].username == commenter.username
    assert by_id[second.id].reply_count == 0
    assert by_id[second.id].replies == []
    assert services.comments.count_project_comments(project.id) == 4


def test_user_comments_and_pagination(services, thread):
    owner, commenter, project = thread
    for n in range(3):
        services.comments.create_comment(project.id, schemas.CommentCreate(content=f"Note {n}"), commenter.id)
    assert len(services.comments.get_user_comments(commenter.id)) == 3
    assert len(services.comments.get_project_comments(project.id, limit=2)) == 2
    with pytest.raises(NotFoundError):
        services.comments.get_user_comments(9999)
    with pytest.raises(NotFoundError):
        services.comments.get_project_comments(9999)


def test_project_comments_attach_every_reply(services, thread):
    owner, commenter, project = thread
    parent = services.comments.create_comment(project.id, schemas.CommentCreate(content="Busy thread"), commenter.id)
    for n in range(55):
        services.comments.create_reply(parent.id, schemas.CommentCreate(content=f"Reply {n}"), owner.id)

    [listed] = services.comments.get_project_comments(project.id)
    assert listed.reply_count == 55
    assert len(listed.replies) == listed.reply_count
    assert listed.replies[0].content == "Reply 0"
    assert listed.replies[-1].content == "Reply 54"
