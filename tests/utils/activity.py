from typing import List

from src.domain.entities import ActivityAction


def actions_recorded(mock_uow) -> List[ActivityAction]:
    """Activity actions written through uow.activity_logs.create, in order"""
    return [call.args[0].action for call in mock_uow.activity_logs.create.await_args_list]


def entries_recorded(mock_uow) -> list:
    return [call.args[0] for call in mock_uow.activity_logs.create.await_args_list]
