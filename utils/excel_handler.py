"""
Excel export of event participants
"""

import math
from io import BytesIO

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


class ExcelHandler:
    SHEET_NAME = 'Participants'
    HEADERS = ['Name', 'Register No.', 'Course', 'Department', 'E-mail', 'Attendance']
    COLUMN_WIDTHS = {'A': 25, 'B': 15, 'C': 20, 'D': 20, 'E': 35, 'F': 12}

    BASE_ROW_HEIGHT = 30

    def __init__(self):
        header_side = Side(style='thin', color='B0C4DE')
        body_side = Side(style='thin', color='D3D3D3')

        self.header_font = Font(bold=True, size=12, color='FFFFFF')
        self.header_fill = PatternFill('solid', fgColor='154CB3')
        self.header_alignment = Alignment(horizontal='center', vertical='center')
        self.header_border = Border(top=header_side, bottom=header_side, left=header_side, right=header_side)

        self.body_font = Font(size=11, color='333333')
        self.email_font = Font(size=11, color='1E90FF')
        self.body_alignment = Alignment(vertical='center', wrap_text=True)
        self.centered_body_alignment = Alignment(horizontal='center', vertical='center', wrap_text=True)
        self.body_border = Border(top=body_side, bottom=body_side, left=body_side, right=body_side)
        self.tinted_fill = PatternFill('solid', fgColor='E6F0FA')
        self.plain_fill = PatternFill('solid', fgColor='FFFFFF')

    @classmethod
    def row_height_for_email(cls, email):
        """Long e-mails wrap; grow the row 15pt per extra 30 chars"""
        length = len(email or '')
        if length > 30:
            return max(cls.BASE_ROW_HEIGHT, cls.BASE_ROW_HEIGHT + math.ceil((length - 30) / 30) * 15)
        return cls.BASE_ROW_HEIGHT

    def export_participants(self, students):
        """
        Build the participants workbook; None when there is nobody to export
        """
        if not students:
            return None

        export_data = []
        for student in students:
            export_data.append({
                'Name': student.name or '',
                'Register No.': student.register_number or '',
                'Course': student.course or '',
                'Department': student.department or '',
                'E-mail': student.email or '',
                'Attendance': '',
            })

        df = pd.DataFrame(export_data, columns=self.HEADERS)

        output = BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            df.to_excel(writer, sheet_name=self.SHEET_NAME, index=False)
            worksheet = writer.sheets[self.SHEET_NAME]

            for cell in worksheet[1]:
                cell.font = self.header_font
                cell.fill = self.header_fill
                cell.alignment = self.header_alignment
                cell.border = self.header_border
            worksheet.row_dimensions[1].height = self.BASE_ROW_HEIGHT

            for index, student in enumerate(students):
                row_number = index + 2  # row 1 is the header
                fill = self.tinted_fill if index % 2 == 0 else self.plain_fill
                for column, header in enumerate(self.HEADERS, start=1):
                    cell = worksheet.cell(row=row_number, column=column)
                    cell.font = self.email_font if header == 'E-mail' else self.body_font
                    cell.alignment = self.centered_body_alignment if header == 'Register No.' else self.body_alignment
                    cell.border = self.body_border
                    cell.fill = fill
                worksheet.row_dimensions[row_number].height = self.row_height_for_email(student.email)

            for col, width in self.COLUMN_WIDTHS.items():
                worksheet.column_dimensions[col].width = width

        output.seek(0)
        return output.getvalue()
