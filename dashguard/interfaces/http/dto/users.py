# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateUserRequestDTO(BaseModel):
    # Length rules live in CredentialStore so every caller gets the same messages.
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ChangePasswordRequestDTO(BaseModel):
    user_id: int = Field(alias="userId", ge=1)
    new_password: str = Field(alias="newPassword", min_length=1)

    model_config = ConfigDict(validate_by_name=True)


class UserInfoDTO(BaseModel):
    id: int
    username: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UsersListDTO(BaseModel):
    users: list[UserInfoDTO]
