"""
Package core - Logic nghiệp vụ không phụ thuộc REST API:
ràng buộc lịch đánh giá, dựng cây bình luận và worker chạy nền.
"""
