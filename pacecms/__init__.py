"""
Pacemaker Admin Backend

온라인 교육 플랫폼(강의, 전자책, 워크숍, 메인 비주얼)의 관리자 백엔드입니다.

주요 모듈:
- app: Flask 메인 애플리케이션 (헬스체크, seed 명령)
- config: 설정 관리
- auth: 인증 및 권한 관리
- database: Firestore 데이터베이스 연동
- storage: S3 호환 오브젝트 스토리지 파일 관리
- uploads: 썸네일/전자책/비디오 업로드 처리
- aggregation: 찜/구매/리뷰 집계
- resources, courses, ebooks, workshops, main_visual: 리소스별 폼 검증과 응답 변환
- ordering: 드래그 앤 드롭 순서 변경
- scheduler: 백그라운드 URL 갱신
- api_routes: REST API 엔드포인트
- web_routes: 관리자 로그인/대시보드 페이지
- api_client, list_screen, navigation, confirm, notifier: 관리자 목록 화면 로직
- seed: 목업 데이터 생성
"""

# 패키지 정보
__version__ = "1.0.0"
__description__ = "Pacemaker content & commerce admin backend"
