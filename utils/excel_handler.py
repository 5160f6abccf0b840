"""
Excel处理工具类
用于导出排行榜
"""

import pandas as pd
from io import BytesIO

from utils.helpers import format_datetime


class ExcelHandler:
    def __init__(self):
        self.leaderboard_columns = {
            'rank': '名次',
            'title': '作品名称',
            'hostName': '主理人',
            'hostType': '主理人类型',
            'category': '分类',
            'totalVotes': '票数',
            'juryScore': '评委均分',
            'overallScore': '综合得分',
            'uploadedAt': '上传时间',
        }

    def generate_leaderboard_excel(self, entries, sheet_name='排行榜'):
        """
        生成排行榜 Excel 文件

        entries: 已按综合得分排好序的作品字典列表
        """
        rows = []
        for rank, entry in enumerate(entries, start=1):
            rows.append({
                '名次': rank,
                '作品名称': entry.get('title', ''),
                '主理人': entry.get('hostName', ''),
                '主理人类型': entry.get('hostType', ''),
                '分类': entry.get('category', ''),
                '票数': entry.get('totalVotes', 0),
                '评委均分': round(float(entry.get('juryScore') or 0), 2),
                '综合得分': round(float(entry.get('overallScore') or 0), 2),
                '上传时间': format_datetime(entry.get('uploadedAt')),
            })

        df = pd.DataFrame(rows, columns=list(self.leaderboard_columns.values()))

        output = BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)

            worksheet = writer.sheets[sheet_name]

            # 设置列宽
            column_widths = {
                'A': 8,   # 名次
                'B': 30,  # 作品名称
                'C': 18,  # 主理人
                'D': 22,  # 主理人类型
                'E': 22,  # 分类
                'F': 10,  # 票数
                'G': 12,  # 评委均分
                'H': 12,  # 综合得分
                'I': 20   # 上传时间
            }

            for col, width in column_widths.items():
                worksheet.column_dimensions[col].width = width

        output.seek(0)
        return output.getvalue()
