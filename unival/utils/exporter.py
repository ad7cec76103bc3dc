"""
Module xuất dữ liệu ra file Excel.
Hỗ trợ định dạng đẹp (kẻ bảng, tô màu header, tự động giãn cột).
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional

import pandas as pd
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from openpyxl.utils import get_column_letter

from unival.models.course import Course
from unival.models.evaluation import Evaluation
from unival.models.schedule import ScheduleEntry

logger = logging.getLogger(__name__)

# Các cột căn trái (văn bản dài), còn lại căn giữa
LEFT_ALIGNED_COLUMNS = {"Title", "Description", "Course Name", "Course"}

HEADER_FONT = Font(name='Times New Roman', size=12, bold=True, color='FFFFFF')
HEADER_FILL = PatternFill(start_color="0070C0", end_color="0070C0", fill_type="solid")
CONTENT_FONT = Font(name='Times New Roman', size=11)
THIN_BORDER = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin')
)


def _lookup(mapping: Optional[Mapping], key) -> str:
    if not key:
        return ""
    value = (mapping or {}).get(key)
    return str(value) if value is not None else str(key)


class Exporter:
    """
    Class chịu trách nhiệm xuất dữ liệu (bài đánh giá, lịch học, môn học) ra Excel.
    """

    # ========== DATAFRAMES ==========

    @staticmethod
    def evaluations_frame(evaluations: Iterable[Evaluation],
                          courses: Optional[Mapping[str, Course]] = None,
                          rooms: Optional[Mapping] = None) -> pd.DataFrame:
        """Bảng bài đánh giá, sắp xếp theo Ngày -> Giờ bắt đầu."""
        data = []
        for e in evaluations:
            data.append({
                "Date": e.date,
                "Start": e.start_time,
                "End": e.end_time,
                "Title": e.title,
                "Type": e.type,
                "Course": _lookup(courses, e.course_id),
                "Room": _lookup(rooms, e.room_id),
                "Published": "Yes" if e.is_published else "No",
                "Description": e.description,
            })
        df = pd.DataFrame(data, columns=["Date", "Start", "End", "Title", "Type", "Course",
                                         "Room", "Published", "Description"])
        if not df.empty:
            df = df.sort_values(by=["Date", "Start"]).reset_index(drop=True)
        return df

    @staticmethod
    def schedules_frame(schedules: Iterable[ScheduleEntry],
                        courses: Optional[Mapping[str, Course]] = None,
                        rooms: Optional[Mapping] = None,
                        slots: Optional[Mapping] = None,
                        cohorts: Optional[Mapping] = None) -> pd.DataFrame:
        data = []
        for s in schedules:
            data.append({
                "Course": _lookup(courses, s.course_id),
                "Cohort": _lookup(cohorts, s.cohort_id),
                "Room": _lookup(rooms, s.room_id),
                "Time Slot": _lookup(slots, s.slot_id),
                "Semester": s.semester,
                "Academic Year": s.academic_year,
                "Active": "Yes" if s.is_active else "No",
            })
        return pd.DataFrame(data, columns=["Course", "Cohort", "Room", "Time Slot",
                                           "Semester", "Academic Year", "Active"])

    @staticmethod
    def courses_frame(courses: Iterable[Course],
                      departments: Optional[Mapping] = None) -> pd.DataFrame:
        data = [{
            "Code": c.code,
            "Course Name": c.name,
            "Department": _lookup(departments, c.department_id),
        } for c in courses]
        df = pd.DataFrame(data, columns=["Code", "Course Name", "Department"])
        if not df.empty:
            df = df.sort_values(by=["Code"]).reset_index(drop=True)
        return df

    # ========== FORMATTING ==========

    @staticmethod
    def _format_sheet(worksheet, columns: List[str]) -> None:
        """Kẻ khung, tô header và tự động giãn cột cho một sheet."""
        header_align = Alignment(horizontal='center', vertical='center')
        center_align = Alignment(horizontal='center', vertical='center')
        left_align = Alignment(horizontal='left', vertical='center')

        for col_idx, column_cells in enumerate(worksheet.columns, 1):
            length = max(len(str(cell.value)) if cell.value is not None else 0 for cell in column_cells)
            worksheet.column_dimensions[get_column_letter(col_idx)].width = (length + 4) * 1.2

            header_name = columns[col_idx - 1] if col_idx <= len(columns) else ""
            for cell in column_cells:
                cell.border = THIN_BORDER
                if cell.row == 1:
                    cell.font = HEADER_FONT
                    cell.fill = HEADER_FILL
                    cell.alignment = header_align
                else:
                    cell.font = CONTENT_FONT
                    cell.alignment = left_align if header_name in LEFT_ALIGNED_COLUMNS else center_align

    @staticmethod
    def write_sheets(sheets: Dict[str, pd.DataFrame], file_path: str) -> bool:
        """
        Ghi nhiều DataFrame vào một file Excel (mỗi DataFrame một sheet).

        Args:
            sheets (Dict[str, DataFrame]): Tên sheet -> dữ liệu.
            file_path (str): Đường dẫn file lưu (.xlsx).

        Returns:
            bool: True nếu thành công.
        """
        if not sheets or all(df.empty for df in sheets.values()):
            logger.warning("Không có dữ liệu để xuất.")
            return False

        try:
            with pd.ExcelWriter(file_path, engine='openpyxl') as writer:
                for name, df in sheets.items():
                    df.to_excel(writer, index=False, sheet_name=name)
                    Exporter._format_sheet(writer.sheets[name], list(df.columns))
            logger.info(f"Đã xuất file Excel thành công tại: {file_path}")
            return True
        except Exception as e:
            logger.error(f"Lỗi khi xuất file Excel: {str(e)}")
            return False

    # ========== EXPORTS ==========

    @staticmethod
    def export_evaluations(evaluations: Iterable[Evaluation], file_path: str,
                           courses: Optional[Mapping[str, Course]] = None,
                           rooms: Optional[Mapping] = None) -> bool:
        df = Exporter.evaluations_frame(evaluations, courses, rooms)
        return Exporter.write_sheets({"Evaluations": df}, file_path)

    @staticmethod
    def export_schedules(schedules: Iterable[ScheduleEntry], file_path: str, **lookups) -> bool:
        df = Exporter.schedules_frame(schedules, **lookups)
        return Exporter.write_sheets({"Schedules": df}, file_path)

    @staticmethod
    def export_courses(courses: Iterable[Course], file_path: str,
                       departments: Optional[Mapping] = None) -> bool:
        return Exporter.write_sheets({"Courses": Exporter.courses_frame(courses, departments)}, file_path)

    @staticmethod
    def export_report(file_path: str,
                      evaluations: Iterable[Evaluation] = (),
                      schedules: Iterable[ScheduleEntry] = (),
                      courses: Iterable[Course] = (),
                      departments: Optional[Mapping] = None) -> bool:
        """Báo cáo tổng hợp: 3 sheet Evaluations / Schedules / Courses."""
        courses = list(courses)
        course_map = {c.course_id: c for c in courses}
        return Exporter.write_sheets({
            "Evaluations": Exporter.evaluations_frame(evaluations, course_map),
            "Schedules": Exporter.schedules_frame(schedules, courses=course_map),
            "Courses": Exporter.courses_frame(courses, departments),
        }, file_path)
