# blog_api/api/users/schemas.py
from marshmallow import Schema, fields, EXCLUDE

class RegisterSchema(Schema):
    """
    POST /api/users/register
    Shape and email format only; the remaining rules live in UserService.register.
    """
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(load_default=None)
    email = fields.Email(load_default=None)
    password = fields.Str(load_default=None)
    password2 = fields.Str(load_default=None)

class LoginSchema(Schema):
    """POST /api/users/login"""
    class Meta:
        unknown = EXCLUDE

    email = fields.Str(load_default=None)
    password = fields.Str(load_default=None)

class UserEditSchema(Schema):
    """PATCH /api/users/edit-user"""
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(load_default=None)
    email = fields.Email(load_default=None)
    current_password = fields.Str(load_default=None, data_key="currentPassword")
    new_password = fields.Str(load_default=None, data_key="newPassword")
    confirm_new_password = fields.Str(load_default=None, data_key="confirmNewPassword")

class UserPublicResponseSchema(Schema):
    """
    A user as other clients may see it.
    The password hash is not declared, so it is never dumped.
    """
    user_id = fields.Str(required=True, dump_only=True)
    name = fields.Str(required=True)
    email = fields.Email(required=True)
    avatar = fields.Str(allow_none=True)
    posts = fields.Int(required=True)
    created_at = fields.DateTime()

class LoginResponseSchema(Schema):
    token = fields.Str(required=True)
    id = fields.Str(required=True)
    name = fields.Str(required=True)

class RegisterResponseSchema(Schema):
    message = fields.Str(required=True)
    user_id = fields.Str(required=True)
