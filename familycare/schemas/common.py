"""
common.py

스키마 공통 베이스.

프론트엔드(React)는 camelCase JSON을 주고받으므로
모든 요청/응답 스키마는 CamelModel을 상속한다.
- 요청: camelCase / snake_case 모두 허용 (populate_by_name)
- 응답: FastAPI response_model 직렬화 시 camelCase(by_alias)로 출력
- ORM 객체에서 바로 변환 (from_attributes)

"""

import uuid
from datetime import date
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _blank_to_none(v: Any) -> Any:
    # 폼에서 비워둔 값은 "" 로 넘어옴
    if isinstance(v, str) and not v.strip():
        return None
    return v


# 빈 문자열을 None 으로 받는 날짜 / 문자열 타입
OptionalDate = Annotated[date | None, BeforeValidator(_blank_to_none)]
OptionalStr = Annotated[str | None, BeforeValidator(_blank_to_none)]


class StaffSummary(CamelModel):
    id: uuid.UUID
    full_name: str
    nick_name: str
    group: str


def dump(schema: type[BaseModel], obj: Any) -> dict:
    """ORM 객체를 응답용 camelCase dict 로 변환 ({"data": ...} 래핑 응답에서 사용)"""
    return schema.model_validate(obj).model_dump(mode="json", by_alias=True)
