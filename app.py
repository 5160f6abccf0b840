from flask import Flask, request, jsonify, g
import os
import time
from dotenv import load_dotenv
from werkzeug.middleware.proxy_fix import ProxyFix

load_dotenv()

from config import config as config_map
from database import DatabaseManager
from user_manager import resolve_admin_password_hash
from api import (
    auth_bp,
    entries_bp,
    voting_bp,
    jury_bp,
    leaderboard_bp,
    admin_bp,
    maintenance_bp,
)


def create_app(env_name=None):
    app = Flask(__name__)
    env_name = (env_name or os.environ.get('APP_ENV', 'default')).lower()
    config_class = config_map.get(env_name, config_map['default'])
    app.config.from_object(config_class)
    config_class.init_app(app)

    if env_name == 'production' and not app.config.get('SECRET_KEY'):
        raise RuntimeError('SECRET_KEY environment variable is required in production')

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    @app.before_request
    def start_request_timer():
        g.request_start_time = time.perf_counter()

    @app.after_request
    def log_request_time(response):
        start_time = getattr(g, 'request_start_time', None)
        if start_time is not None:
            duration_ms = (time.perf_counter() - start_time) * 1000
            app.logger.info(
                "Request %s %s took %.2fms, status %d",
                request.method,
                request.path,
                duration_ms,
                response.status_code,
            )
        return response

    # 应用启动时初始化存储结构（MySQL 建表，其它后端无操作）
    try:
        DatabaseManager().init_database()
    except Exception as e:
        # 记录错误但不阻止应用启动，健康检查接口会反映存储状态
        app.logger.error(f"数据库初始化检查失败: {e}")

    # 管理员口令哈希在启动时确定一次
    app.config['ADMIN_PASSWORD_HASH_RESOLVED'] = resolve_admin_password_hash(app.config)
    if not app.config['ADMIN_PASSWORD_HASH_RESOLVED']:
        app.logger.warning("未配置 ADMIN_PASSWORD / ADMIN_PASSWORD_HASH，管理员登录不可用")

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(entries_bp, url_prefix='/api')
    app.register_blueprint(voting_bp, url_prefix='/api')
    app.register_blueprint(jury_bp, url_prefix='/api')
    app.register_blueprint(leaderboard_bp, url_prefix='/api')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
    app.register_blueprint(maintenance_bp, url_prefix='/api')

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'success': False, 'error': 'not_found', 'message': '接口不存在'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'success': False, 'error': 'method_not_allowed', 'message': '请求方法不被允许'}), 405

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error(f"服务器内部错误: {error}")
        return jsonify({'success': False, 'error': 'internal_error', 'message': '服务器内部错误'}), 500

    return app


app = create_app()


if __name__ == '__main__':
    app.run(
        host=app.config.get('HOST', '0.0.0.0'),
        port=app.config.get('PORT', 5000),
        debug=app.config.get('DEBUG', False),
    )
