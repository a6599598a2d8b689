"""
어댑터 레이어

외부 서비스(거래소)와의 연동을 담당.
"""
