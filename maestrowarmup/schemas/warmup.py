"""
Warm-up schemas for MaestroWarmup.

Defines Pydantic models for:
- Class profiles (the four fixed proficiency tiers)
- Activity types
- Warm-up requests, attachments and extracted lesson metadata
- Generated warm-up results
"""

from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ClassType(str, Enum):
    PASITOS = "pasitos"    # Beginning
    VIAJE = "viaje"        # Intermediate
    ADELANTE = "adelante"  # Int/Adv
    CUMBRE = "cumbre"      # Advanced


class ActivityType(str, Enum):
    WRITTEN = "written"
    SPOKEN = "spoken"
    LISTENING = "listening"
    OTHER = "other"

    @property
    def label(self) -> str:
        return ACTIVITY_LABELS[self]


ACTIVITY_LABELS = {
    ActivityType.WRITTEN: "Written (Translation/Grammar)",
    ActivityType.SPOKEN: "Spoken (Partner Discussion)",
    ActivityType.LISTENING: "Listening (Comprehension)",
    ActivityType.OTHER: "Other (Drawing/Game)",
}


# -----------------------------------------------------------------------------
# Class profiles
# -----------------------------------------------------------------------------

class ProfileColor(BaseModel):
    model_config = ConfigDict(frozen=True)

    background: str
    text: str
    border: str


class ClassProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    level: str
    color: ProfileColor


CLASS_PROFILES: dict[ClassType, ClassProfile] = {
    ClassType.PASITOS: ClassProfile(
        name="Pasitos",
        level="Beginning",
        color=ProfileColor(background="#DCFCE7", text="#166534", border="#BBF7D0"),
    ),
    ClassType.VIAJE: ClassProfile(
        name="Viaje",
        level="Intermediate",
        color=ProfileColor(background="#DBEAFE", text="#1E40AF", border="#BFDBFE"),
    ),
    ClassType.ADELANTE: ClassProfile(
        name="Adelante",
        level="Int/Adv",
        color=ProfileColor(background="#F3E8FF", text="#6B21A8", border="#E9D5FF"),
    ),
    ClassType.CUMBRE: ClassProfile(
        name="Cumbre",
        level="Advanced",
        color=ProfileColor(background="#FFEDD5", text="#9A3412", border="#FED7AA"),
    ),
}


def get_class_profile(class_type: ClassType) -> ClassProfile:
    """Look up the display profile for a class type."""
    return CLASS_PROFILES[ClassType(class_type)]


# -----------------------------------------------------------------------------
# Request side
# -----------------------------------------------------------------------------

class FileAttachment(BaseModel):
    name: str
    mime_type: str
    base64: str  # base64-encoded file bytes

    @property
    def extension(self) -> str:
        return self.name.rsplit(".", 1)[1].lower() if "." in self.name else ""


class WarmUpRequest(BaseModel):
    class_type: ClassType = ClassType.PASITOS
    unit: str = ""
    activity_type: ActivityType = ActivityType.WRITTEN
    vocabulary: str = ""
    learning_targets: str = ""
    lesson_plan: str = ""  # extra context for today's lesson
    attachment: Optional[FileAttachment] = None

    @property
    def profile(self) -> ClassProfile:
        return get_class_profile(self.class_type)


class LessonMetadata(BaseModel):
    """Lesson details extracted from an uploaded document."""
    unit: Optional[str] = None
    vocabulary: Optional[str] = None
    learning_targets: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("learning_targets", "learningTargets"),
    )


# -----------------------------------------------------------------------------
# Result side
# -----------------------------------------------------------------------------

class WarmUpResult(BaseModel):
    title: str
    instruction: str  # student-facing instruction
    content: str      # the exercise itself
    teacher_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("teacher_key", "teacherKey"),
    )
    listening_script: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("listening_script", "listeningScript"),
    )

    @property
    def has_listening_script(self) -> bool:
        return bool(self.listening_script and self.listening_script.strip())
