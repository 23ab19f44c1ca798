"""
App layer: 서버 (FastAPI + HTMX).

역할:
- /admin/files 파일 관리 화면 (로그인, 목록, 폴더/이미지 변경)
- /api/files, /api/orders REST API
- ⚠️ 저장소 규칙 없음 (services, core에 위임)
"""
