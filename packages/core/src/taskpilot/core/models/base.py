"""模型基类 -- Python 侧 snake_case，JSON 侧 camelCase"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """REST 载荷基类

    序列化时使用 camelCase 别名（assignedTo / createdAt ...），
    反序列化同时接受别名与字段名。
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
