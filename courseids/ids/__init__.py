from .compose import (
    DELIMITER,
    ID_BUILDERS,
    assistant_prompt_id,
    chat_id,
    course_id,
    course_user_id,
    derive_id,
    division_id,
    flag_id,
    global_user_id,
    item_id,
    learning_objective_id,
    message_id,
    topic_or_week_id,
    upload_content_id,
)
from .course_code import (
    CourseCodeAllocation,
    allocate_course_code,
    course_code,
    encode_course_code,
    is_valid_course_code,
)

__all__ = [
    "DELIMITER",
    "ID_BUILDERS",
    "assistant_prompt_id",
    "chat_id",
    "course_id",
    "course_user_id",
    "derive_id",
    "division_id",
    "flag_id",
    "global_user_id",
    "item_id",
    "learning_objective_id",
    "message_id",
    "topic_or_week_id",
    "upload_content_id",
    "CourseCodeAllocation",
    "allocate_course_code",
    "course_code",
    "encode_course_code",
    "is_valid_course_code",
]
