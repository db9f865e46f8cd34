"""
Config 패키지

임시 메일 클라이언트 설정 (pydantic-settings 기반)
- TEMPMAIL_ 접두사 환경 변수와 .env 파일에서 값을 읽음
- TEMPMAIL_ENVIRONMENT (없으면 ENVIRONMENT) 값에 따라 개발/운영/테스트 설정 클래스 선택
"""
