# -*- coding: utf-8 -*-
# Point the app at a throwaway SQLite database before anything imports settings.

import atexit
import os
import shutil
import tempfile

_tmp = tempfile.mkdtemp(prefix="diyetim-test-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_tmp, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["DEPLOY_PHASE"] = "test"
atexit.register(shutil.rmtree, _tmp, ignore_errors=True)
