"""
服务模块
"""

from .roster import RosterImporter, members_to_frame

__all__ = ['RosterImporter', 'members_to_frame']
