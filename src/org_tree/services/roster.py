"""
成员名册导入导出
从 CSV/Excel 名册批量创建成员，或把成员列表导出为 DataFrame
"""
import logging
import os
from pathlib import Path
from typing import Dict, List, Any, Optional, Iterable

import pandas as pd

from ..core.node.entity import OrgNode
from ..core.tree.store import TreeStore
from ..exceptions import RosterImportError


logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["id", "name", "title", "department", "avatar", "email", "parentId", "depth"]


class RosterImporter:
    """
    名册导入器

    名册格式（第一行为列名）：
        key, name, title, department, avatar, email, manager
    manager 为上级所在行的 key，留空表示直接向根节点汇报
    """

    REQUIRED_COLUMNS = ("key", "name", "title", "department")
    OPTIONAL_COLUMNS = ("avatar", "email", "manager")
    SUPPORTED_SUFFIXES = (".csv", ".xlsx", ".xls")

    def __init__(self, store: TreeStore, config: Optional[Dict[str, Any]] = None):
        self.store = store
        self.config = config or {}
        self.sheet_name = self.config.get('sheet_name', 0)
        self.encoding = self.config.get('encoding', 'utf-8')

        # 统计信息
        self.stats = {
            'files_processed': 0,
            'rows_parsed': 0,
            'members_created': 0,
            'rows_failed': 0
        }

    def validate_file(self, file_path: str) -> bool:
        """验证文件是否可导入"""
        return os.path.isfile(file_path) and Path(file_path).suffix.lower() in self.SUPPORTED_SUFFIXES

    def _read_frame(self, file_path: str) -> pd.DataFrame:
        suffix = Path(file_path).suffix.lower()
        if suffix == ".csv":
            return pd.read_csv(file_path, dtype=str, encoding=self.encoding)
        return pd.read_excel(file_path, dtype=str, sheet_name=self.sheet_name)

    def parse_data(self, file_path: str) -> List[Dict[str, str]]:
        """
        解析名册为行字典列表

        Raises:
            RosterImportError: 文件无效、读取失败或缺少必需列
        """
        if not self.validate_file(file_path):
            raise RosterImportError(f"无效的文件: {file_path}", file_path=file_path)

        try:
            df = self._read_frame(file_path)
        except (OSError, ValueError) as e:
            raise RosterImportError(f"读取名册失败: {e}", file_path=file_path) from e

        df.columns = [str(col).strip().lower() for col in df.columns]
        missing = [col for col in self.REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise RosterImportError(f"缺少必需列: {missing}", file_path=file_path)

        for col in self.OPTIONAL_COLUMNS:
            if col not in df.columns:
                df[col] = ""

        df = df.fillna("")
        rows = []
        for _, row in df.iterrows():
            key = str(row["key"]).strip()
            if not key:
                continue
            rows.append({
                'key': key,
                'name': str(row["name"]).strip(),
                'title': str(row["title"]).strip(),
                'department': str(row["department"]).strip(),
                'avatar': str(row["avatar"]).strip(),
                'email': str(row["email"]).strip(),
                'manager': str(row["manager"]).strip(),
            })

        self.stats['rows_parsed'] += len(rows)
        self.stats['files_processed'] += 1
        return rows

    def import_rows(self, rows: List[Dict[str, str]], parent_id: Optional[str] = None) -> Dict[str, Any]:
        """
        按上下级依赖顺序创建成员

        Args:
            rows: parse_data 的结果
            parent_id: manager 留空的行挂接到的成员，默认根节点

        Returns:
            {'created': 数量, 'failed': 数量, 'errors': [...], 'id_map': {key: 成员ID}}
        """
        anchor = parent_id or self.store.root_id
        id_map: Dict[str, str] = {}
        errors: List[Dict[str, Any]] = []

        pending = []
        seen_keys = set()
        for row in rows:
            if row['key'] in seen_keys:
                errors.append({'key': row['key'], 'error': "Duplicate roster key"})
                continue
            seen_keys.add(row['key'])
            pending.append(row)

        # 每一轮创建上级已就绪的行，直到没有进展
        progress = True
        while pending and progress:
            progress = False
            waiting = []
            for row in pending:
                manager = row['manager']
                if manager and manager not in id_map:
                    waiting.append(row)
                    continue

                target = id_map[manager] if manager else anchor
                fields = {k: row[k] for k in ('name', 'title', 'department')}
                if row['avatar']:
                    fields['avatar'] = row['avatar']
                if row['email']:
                    fields['email'] = row['email']

                result = self.store.create(target, fields)
                progress = True
                if result.success:
                    id_map[row['key']] = result.node.node_id
                else:
                    errors.append({'key': row['key'], 'error': result.message})
            pending = waiting

        for row in pending:
            errors.append({
                'key': row['key'],
                'error': f"Unresolved manager: {row['manager']}"
            })

        self.stats['members_created'] += len(id_map)
        self.stats['rows_failed'] += len(errors)

        logger.info(f"名册导入完成: 成功 {len(id_map)}, 失败 {len(errors)}")
        return {
            'created': len(id_map),
            'failed': len(errors),
            'errors': errors,
            'id_map': id_map
        }

    def import_into_store(self, file_path: str, parent_id: Optional[str] = None) -> Dict[str, Any]:
        """
        导入的完整流程
        1. 验证文件
        2. 解析名册
        3. 创建成员
        """
        rows = self.parse_data(file_path)
        return self.import_rows(rows, parent_id=parent_id)


def members_to_frame(nodes: Iterable[OrgNode]) -> pd.DataFrame:
    """
    把前序排列的成员列表导出为 DataFrame（列表/表格视图）

    depth 由 parentId 推出，父节点须出现在子节点之前
    """
    depths: Dict[str, int] = {}
    records = []
    for node in nodes:
        depth = depths.get(node.parent_id, -1) + 1 if node.parent_id is not None else 0
        depths[node.node_id] = depth
        records.append({
            'id': node.node_id,
            'name': node.name,
            'title': node.title,
            'department': node.department,
            'avatar': node.avatar,
            'email': node.email,
            'parentId': node.parent_id,
            'depth': depth,
        })

    return pd.DataFrame.from_records(records, columns=FRAME_COLUMNS)
