#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""로컬 개발용 .env 템플릿 생성"""
import os
import sys
from pathlib import Path

# 프로젝트 루트
project_root = Path(__file__).parent.parent.parent
env_file = project_root / ".env"

# 로컬 .env 템플릿
# 주의: 실제 민감 정보는 서버 담당자로부터 별도로 받아서 수동으로 입력해야 함
env_content = """# Database
# 실제 값은 서버 담당자로부터 받아서 수동으로 입력 필요
DATABASE_URL=postgresql+asyncpg://<DB_USER>:<DB_PASSWORD>@localhost:5432/ssc_exam_hub

# Security (인증 서비스의 JWT 서명 키)
SECRET_KEY=<JWT_SECRET>
ALGORITHM=HS256

# Object storage
STORAGE_URL=https://<PROJECT_REF>.supabase.co/storage/v1
STORAGE_SERVICE_KEY=<SERVICE_ROLE_KEY>
STORAGE_BUCKET=content

# Bulk import
IMPORT_BATCH_SIZE=100
IMPORT_ATOMIC=true

# CORS
ALLOWED_ORIGINS=http://localhost:3000

# Environment
# 로컬 개발 시 development로 변경하면 상세 에러 메시지 확인 가능
ENVIRONMENT=development
PORT=8001
"""


def create_env_file(force: bool = False) -> Path:
    """.env 템플릿 작성 (UTF-8, LF). 기존 파일은 force일 때만 .env.backup으로 옮긴 뒤 덮어씀"""
    if env_file.exists():
        if not force:
            print(f"[SKIP] 이미 존재합니다: {env_file} (덮어쓰려면 --force)")
            return env_file
        backup_file = project_root / ".env.backup"
        backup_file.write_text(env_file.read_text(encoding="utf-8"), encoding="utf-8", newline="\n")
        print(f"[INFO] 기존 .env 백업: {backup_file}")

    env_file.write_text(env_content, encoding="utf-8", newline="\n")
    if os.name != "nt":
        os.chmod(env_file, 0o600)
    print(f"[OK] .env 템플릿 생성: {env_file}")
    print("[INFO] <...> 값을 실제 값으로 바꾼 뒤 서버를 실행하세요")
    return env_file


if __name__ == "__main__":
    create_env_file(force="--force" in sys.argv[1:])
