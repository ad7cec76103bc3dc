"""
Package ui - Giao diện PyQt5 / qfluentwidgets:
cửa sổ đăng nhập, dialog đăng ký và dashboard theo vai trò.
"""
