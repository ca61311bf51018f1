from __future__ import annotations
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class EntryType(str, Enum):
    FILE = "FILE"
    DIRECTORY = "DIRECTORY"


class FileStatus(BaseModel):
    """Directory entry as returned by GETFILESTATUS and LISTSTATUS."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    path_suffix: str = Field("", alias="pathSuffix")
    type: EntryType = EntryType.FILE
    length: int = 0
    block_size: int = Field(0, alias="blockSize")
    replication: int = 0
    modification_time: int = Field(0, alias="modificationTime")
    access_time: int = Field(0, alias="accessTime")
    owner: Optional[str] = None
    group: Optional[str] = None
    permission: Optional[str] = None

    @property
    def is_directory(self) -> bool:
        return self.type == EntryType.DIRECTORY


class _FileStatusList(BaseModel):
    entries: List[FileStatus] = Field(default_factory=list, alias="FileStatus")


class ListStatusResponse(BaseModel):
    file_statuses: _FileStatusList = Field(alias="FileStatuses")

    @property
    def entries(self) -> List[FileStatus]:
        return self.file_statuses.entries


class FileStatusResponse(BaseModel):
    file_status: FileStatus = Field(alias="FileStatus")


class RemoteException(BaseModel):
    """Error payload the server puts in the body of a failed call."""

    model_config = ConfigDict(extra="ignore")

    exception: Optional[str] = None
    message: Optional[str] = None
    java_class_name: Optional[str] = Field(None, alias="javaClassName")
