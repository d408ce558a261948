"""
Walkthrough template files.

Each entry maps a relative POSIX path to the literal text written there.
Nothing here is formatted or substituted; the generator writes the strings
exactly as they appear.
"""

from typing import Dict

DOCKERFILE = """\
FROM python:3.12-slim

ARG APP_FILE=app_blue.py

WORKDIR /app
RUN pip install --no-cache-dir fastapi uvicorn

COPY ${APP_FILE} app.py

EXPOSE 8080
CMD ["uvicorn", "app:app", "--host", "0.0.0.0", "--port", "8080"]
"""

APP_BLUE = """\
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

app = FastAPI()


@app.api_route("/", methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
def root():
    return PlainTextResponse("Hello from Blue!")
"""

APP_GREEN = """\
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

app = FastAPI()


@app.api_route("/", methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
def root():
    return PlainTextResponse("Hello from Green!")
"""

BUILD_PUSH_WORKFLOW = """\
name: build-push

on:
  push:
    branches: [main]
  workflow_dispatch:

env:
  REGISTRY: ghcr.io
  IMAGE_NAME: ${{ github.repository_owner }}/bluegreen-demo

jobs:
  build-push:
    runs-on: ubuntu-latest
    permissions:
      contents: read
      packages: write
    steps:
      - uses: actions/checkout@v4

      - name: Log in to registry
        uses: docker/login-action@v3
        with:
          registry: ${{ env.REGISTRY }}
          username: ${{ github.actor }}
          password: ${{ secrets.GITHUB_TOKEN }}

      - name: Build blue image
        run: docker build --build-arg APP_FILE=app_blue.py -t $REGISTRY/$IMAGE_NAME:blue .

      - name: Build green image
        run: docker build --build-arg APP_FILE=app_green.py -t $REGISTRY/$IMAGE_NAME:green .

      - name: Push images
        run: |
          docker push $REGISTRY/$IMAGE_NAME:blue
          docker push $REGISTRY/$IMAGE_NAME:green
"""

ROLLOUT_YAML = """\
apiVersion: argoproj.io/v1alpha1
kind: Rollout
metadata:
  name: bluegreen-demo
  labels:
    app: bluegreen-demo
spec:
  replicas: 2
  revisionHistoryLimit: 2
  selector:
    matchLabels:
      app: bluegreen-demo
  template:
    metadata:
      labels:
        app: bluegreen-demo
    spec:
      containers:
        - name: bluegreen-demo
          image: ghcr.io/example/bluegreen-demo:blue
          imagePullPolicy: Always
          ports:
            - containerPort: 8080
  strategy:
    blueGreen:
      activeService: bluegreen-active
      previewService: bluegreen-preview
      autoPromotionEnabled: false
"""

SERVICE_YAML = """\
apiVersion: v1
kind: Service
metadata:
  name: bluegreen-active
spec:
  selector:
    app: bluegreen-demo
  ports:
    - protocol: TCP
      port: 80
      targetPort: 8080
---
apiVersion: v1
kind: Service
metadata:
  name: bluegreen-preview
spec:
  selector:
    app: bluegreen-demo
  ports:
    - protocol: TCP
      port: 80
      targetPort: 8080
"""

INSTALL_SH = """\
#!/usr/bin/env bash
set -e

kubectl create namespace argocd
kubectl apply -n argocd -f https://raw.githubusercontent.com/argoproj/argo-cd/stable/manifests/install.yaml

kubectl create namespace argo-rollouts
kubectl apply -n argo-rollouts -f https://github.com/argoproj/argo-rollouts/releases/latest/download/install.yaml

kubectl port-forward svc/argocd-server -n argocd 8080:443 &
kubectl port-forward svc/bluegreen-active 8081:80 &
wait
"""

CHECK_SH = """\
#!/usr/bin/env bash
set -e

kubectl get pods -l app=bluegreen-demo \\
  -o custom-columns='NAME:.metadata.name,HASH:.metadata.labels.rollouts-pod-template-hash,IMAGE:.spec.containers[*].image,PHASE:.status.phase'
"""

TEMPLATES: Dict[str, str] = {
    "Dockerfile": DOCKERFILE,
    "app_blue.py": APP_BLUE,
    "app_green.py": APP_GREEN,
    ".github/workflows/build-push.yaml": BUILD_PUSH_WORKFLOW,
    "rollout.yaml": ROLLOUT_YAML,
    "service.yaml": SERVICE_YAML,
    "install.sh": INSTALL_SH,
    "check.sh": CHECK_SH,
}
