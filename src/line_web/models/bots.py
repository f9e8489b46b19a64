"""
Result of AsyncLineWeb.get_bots.

get_bots returns a SingleBot when called with web_bot_id and a BotList
otherwise. Both carry a `kind` tag:

    match await client.get_bots(web_bot_id=bot_id):
        case SingleBot(bot=bot): ...
        case BotList(bots=bots, next=token): ...
"""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel


class SingleBot(BaseModel):
    kind: Literal["single"] = "single"
    bot: dict[str, Any]


class BotList(BaseModel):
    kind: Literal["list"] = "list"
    bots: list[dict[str, Any]]
    next: Optional[str] = None


BotsResult = Union[SingleBot, BotList]
