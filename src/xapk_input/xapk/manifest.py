"""
XAPK manifest schema.

Defines the structure of the ``manifest.json`` entry stored at the root of
an XAPK archive. Manifests are validated using Pydantic for type safety;
unknown fields are ignored and missing ones fall back to empty defaults.
Informational fields never fail a load: a value of an unexpected type is
replaced by the field's default.
"""

from typing import Any, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)

INFORMATIONAL_FIELDS = (
    "package_name",
    "name",
    "version_code",
    "version_name",
    "min_sdk_version",
    "target_sdk_version",
    "total_size",
    "icon",
    "permissions",
    "split_configs",
)

TEXT_FIELDS = frozenset(
    {
        "package_name",
        "name",
        "version_code",
        "version_name",
        "min_sdk_version",
        "target_sdk_version",
        "icon",
    }
)


class SplitApk(BaseModel):
    """
    One split APK bundled in the package.

    Descriptors are passed through untouched: ``file`` and ``id`` are exposed
    as written (any JSON value) and every other key is kept as an extra field.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    file: Any = Field(
        None,
        description="Archive entry holding the split APK (e.g., 'base.apk')",
    )

    id: Any = Field(
        None,
        description="Split identifier (e.g., 'base', 'config.arm64_v8a')",
    )


class XapkManifest(BaseModel):
    """
    Metadata record describing a split-APK package.

    Only ``xapk_version`` and ``split_apks`` take part in the support check;
    the remaining fields are informational.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    xapk_version: int = Field(
        0,
        description="Format version declared by the archive producer",
        validation_alias=AliasChoices("xapk_version", "xapkVersion"),
    )

    split_apks: List[SplitApk] = Field(
        default_factory=list,
        description="Split APK descriptors, in archive order",
        validation_alias=AliasChoices("split_apks", "splitApks"),
    )

    package_name: Optional[str] = Field(
        None,
        description="Android application id (e.g., 'com.example.app')",
    )

    name: Optional[str] = Field(
        None,
        description="Human-readable application name",
    )

    version_code: Optional[str] = Field(
        None,
        description="Android version code",
    )

    version_name: Optional[str] = Field(
        None,
        description="Android version name (e.g., '1.2.3')",
    )

    min_sdk_version: Optional[str] = Field(None)

    target_sdk_version: Optional[str] = Field(None)

    total_size: Optional[int] = Field(
        None,
        description="Total uncompressed size of the package in bytes",
    )

    icon: Optional[str] = Field(None)

    permissions: List[Any] = Field(
        default_factory=list,
        description="Requested permissions, as names or producer-specific objects",
    )

    split_configs: List[str] = Field(default_factory=list)

    @field_validator("split_apks", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        """Treat an explicit JSON null list as empty."""
        return [] if value is None else value

    @field_validator(*INFORMATIONAL_FIELDS, mode="wrap")
    @classmethod
    def lenient_informational(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        """
        Accept informational fields in whatever shape the producer wrote.

        JSON numbers are read as text where a string is expected (version
        codes are written both ways). A null or otherwise unusable value
        falls back to the field default.
        """
        default = cls.model_fields[info.field_name].get_default(
            call_default_factory=True
        )
        if value is None:
            return default
        if (
            info.field_name in TEXT_FIELDS
            and isinstance(value, (int, float))
            and not isinstance(value, bool)
        ):
            value = str(value)
        try:
            return handler(value)
        except ValidationError:
            return default

    @property
    def split_apk_files(self) -> List[str]:
        """Entry names of split APKs that declare one."""
        return [
            split.file
            for split in self.split_apks
            if isinstance(split.file, str) and split.file
        ]

    @classmethod
    def from_json(cls, data: bytes | str) -> "XapkManifest":
        """
        Parse a manifest from its JSON text.

        Raises:
            pydantic.ValidationError: If the JSON is malformed or not an object
        """
        return cls.model_validate_json(data)
