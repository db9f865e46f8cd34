"""
Domain 패키지

도메인 엔티티, 값 객체, 포트 인터페이스를 정의합니다.
외부 의존성 없이 순수한 비즈니스 규칙만 포함합니다.

주요 엔티티:
- Session: 임시 메일함 자격 증명 (주소, 비밀번호, 토큰, 계정)
- MessageSummary: 메시지 목록 항목
- MessageDetail: 본문을 포함한 전체 메시지
- SelectedMessage: 현재 열린 메시지와 로딩/오류 상태
- Domain: 메일함 도메인
"""
