# blog_api/api/posts/schemas.py
from marshmallow import Schema, fields, EXCLUDE

# --- API request/response schemas ---

class PostFormSchema(Schema):
    """
    Text fields of the multipart form sent to POST /api/posts and PATCH /api/posts/{post_id}.
    Presence and length rules are enforced by PostService so direct callers get the same checks.
    """
    class Meta:
        unknown = EXCLUDE

    title = fields.Str(load_default=None)
    category = fields.Str(load_default=None)
    description = fields.Str(load_default=None)

class PostResponseSchema(Schema):
    """Final JSON shape of a post."""
    post_id = fields.Str(dump_only=True)
    title = fields.Str(required=True)
    category = fields.Str(required=True)
    description = fields.Str(required=True)
    thumbnail = fields.Str(required=True)
    creator = fields.Str(required=True)
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(required=True)

class MessageResponseSchema(Schema):
    message = fields.Str(required=True)
