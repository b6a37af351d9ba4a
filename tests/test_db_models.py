"""Unit tests for the ORM models defined in microblog.models.

These tests verify basic mapping correctness: table names, the composite
primary key on the comment reference table, and that relationships are
instrumented attributes.
"""

from sqlalchemy.orm import attributes

from microblog import models


def test_table_names():
    """Model classes expose expected __tablename__ values."""
    assert models.User.__tablename__ == "user_account"
    assert models.Post.__tablename__ == "post"
    assert models.Comment.__tablename__ == "comment"
    assert models.post_comment.name == "post_comment"


def test_post_comment_composite_primary_key():
    """A post references a given comment at most once."""
    pk_names = {c.name for c in models.post_comment.primary_key}
    assert pk_names == {"post_id", "comment_id"}


def test_user_unique_columns():
    table = models.User.__table__
    assert table.c.username.unique
    assert table.c.external_id.unique
    assert table.c.password_hash.nullable


def test_relationships_are_instrumented_attributes():
    for attr in (models.Post.comments, models.Comment.posts):
        assert isinstance(attr, attributes.InstrumentedAttribute)


def test_ids_are_assigned_on_flush(db_session):
    post = models.Post(title="t")
    db_session.add(post)
    db_session.flush()

    assert len(post.id) == 32
    assert post.created_at is not None
