# pacecms/app.py (메인 애플리케이션)
from datetime import datetime
import logging
import os

import click
from flask import Flask

from pacecms import __version__
from pacecms.api_routes import api_bp
from pacecms.config import COLLECTIONS, SECRET_KEY, MAX_CONTENT_LENGTH, FIRESTORE_EMULATOR_HOST
from pacecms.database import get_db
from pacecms.scheduler import scheduler, start_scheduler
from pacecms.storage import check_bucket
from pacecms.web_routes import web_bp

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def create_app(config=None):
    """Flask 앱 생성"""
    app = Flask(__name__)
    app.secret_key = SECRET_KEY
    app.config['MAX_CONTENT_LENGTH'] = MAX_CONTENT_LENGTH
    if config:
        app.config.update(config)

    # Blueprint 등록
    app.register_blueprint(api_bp, url_prefix='/api')
    app.register_blueprint(web_bp)

    @app.after_request
    def after_request(response):
        """보안 헤더 추가"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Access-Control-Allow-Origin'] = '*'
        response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, PATCH, DELETE, OPTIONS'
        response.headers['Access-Control-Allow-Headers'] = 'Content-Type, Authorization'
        return response

    @app.route('/health', methods=['GET'])
    def health_check():
        """서비스 상태 확인"""
        try:
            get_db().collection(COLLECTIONS['main-visual']).limit(1).get()
            firestore_status = 'healthy'
        except Exception as e:
            logger.warning(f"Firestore 상태 확인 실패: {e}")
            firestore_status = 'unhealthy'

        try:
            check_bucket()
            s3_status = 'healthy'
        except Exception as e:
            logger.warning(f"S3 상태 확인 실패: {e}")
            s3_status = 'unhealthy'

        overall_status = 'healthy' if (firestore_status == 'healthy' and s3_status == 'healthy') else 'unhealthy'

        return {
            'status': overall_status,
            'timestamp': datetime.utcnow().isoformat(),
            'services': {
                'firestore': firestore_status,
                's3': s3_status,
                'scheduler': scheduler.running
            },
            'version': __version__
        }, 200 if overall_status == 'healthy' else 503

    @app.cli.command('seed')
    @click.option('--wipe', is_flag=True, help='기존 시드 데이터 삭제 후 생성')
    @click.option('--force', is_flag=True, help='에뮬레이터가 아니어도 삭제 허용')
    @click.option('--seed', 'random_seed', type=int, default=None, help='난수 시드')
    def seed_command(wipe, force, random_seed):
        """목업 데이터 생성"""
        from pacecms.seed import run_seed

        if wipe and not (FIRESTORE_EMULATOR_HOST or force):
            click.echo("⚠️ 운영/원격 환경 감지: 데이터 삭제를 건너뜁니다.")
            wipe = False
        summary = run_seed(wipe=wipe, random_seed=random_seed)
        click.echo(f"✨ 시드 생성 완료: {summary}")

    return app


if __name__ == "__main__":
    app = create_app()

    # 스케줄러 시작
    start_scheduler()

    # 서버 시작
    port = int(os.environ.get("PORT", 8080))
    app.logger.info("✅ 앱 초기화 완료")
    app.run(host="0.0.0.0", port=port, debug=not os.environ.get('RAILWAY_ENVIRONMENT'))
